#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Proxy for org.freedesktop.ColorManager.Device objects.
"""

from collections.abc import Iterable

from colormgr.dbus_utils import object_reference
from colormgr.profile import Profile
from colormgr.proxy import EntityProxy, path_to_proxy
from colormgr.types import DeviceKind, DeviceMode, Relation, Scope, encode_enum


class Device(EntityProxy):
    """
    A display, printer, scanner or camera known to the daemon.

    Profiles are assigned to devices. An assignment carries a Relation:
    SOFT when the daemon made it on its own, HARD when a client asked
    for it.
    """

    INTERFACE = "org.freedesktop.ColorManager.Device"

    __slots__ = ()

    async def set_property(self, name: str, value: str):
        """Set a property on the device, e.g. ``Model``."""
        await self._call("SetProperty", "ss", (name, value))

    async def add_profile(self, relation: Relation, profile: Profile):
        """
        Assign a previously created profile to this device.

        The daemon also stores the assignment, so if both objects exist
        again in the future the profile is added back automatically.
        """
        await self._call(
            "AddProfile", "so", (encode_enum(Relation, relation), object_reference(profile))
        )

    async def remove_profile(self, profile: Profile):
        """
        Remove a profile from this device.

        The stored assignment is removed as well. If the profile had been
        added automatically because its metadata names this device, that
        automatic assignment is suppressed from now on.
        """
        await self._call("RemoveProfile", "o", (object_reference(profile),))

    async def make_profile_default(self, profile: Profile):
        await self._call("MakeProfileDefault", "o", (object_reference(profile),))

    async def profile_for_qualifiers(self, qualifiers: Iterable[str]) -> Profile:
        """
        Get the profile the daemon picks for a set of qualifiers.

        Qualifiers may contain ``*`` and ``?`` wildcards.

        :raises NotFound: no profile matches, or profiling is inhibited
        """
        if isinstance(qualifiers, str):
            qualifiers = [qualifiers]
        path = await self._call_for_path("GetProfileForQualifiers", "as", (list(qualifiers),))
        return path_to_proxy(Profile, self._connection, path)

    async def profile_relation(self, profile: Profile) -> Relation:
        reply = await self._call(
            "GetProfileRelation", "o", (object_reference(profile),), reply_signature="s"
        )
        return Relation.decode(reply[0])

    async def profiling_inhibit(self):
        """
        Stop matching profiles for this device while it is profiled.

        While inhibited, profile_for_qualifiers() matches nothing. The
        inhibit is held by this connection: the daemon drops it when the
        connection goes away, even without profiling_uninhibit().
        """
        await self._call("ProfilingInhibit")

    async def profiling_uninhibit(self):
        await self._call("ProfilingUninhibit")

    async def set_enabled(self, enabled: bool):
        """
        Enable or disable the device. The state is shared by all users
        and persists across reboots.
        """
        await self._call("SetEnabled", "b", (bool(enabled),))

    async def changed(self):
        """Wait until some value on this device changes."""
        await self._wait_signal("Changed")

    async def created(self) -> int:
        return await self._get("Created", ("t", "x"))

    async def modified(self) -> int:
        return await self._get("Modified", ("t", "x"))

    async def model(self) -> str:
        return await self._get("Model", "s")

    async def serial(self) -> str:
        return await self._get("Serial", "s")

    async def vendor(self) -> str:
        return await self._get("Vendor", "s")

    async def colorspace(self) -> str:
        return await self._get("Colorspace", "s")

    async def kind(self) -> DeviceKind:
        return DeviceKind.decode(await self._get("Kind", "s"))

    async def device_id(self) -> str:
        return await self._get("DeviceId", "s")

    async def profiles(self) -> list[Profile]:
        """
        Profiles assigned to this device.

        Profiles are listed even when the device is disabled or being
        profiled. The first entry is not necessarily the one to apply.
        """
        paths = await self._get("Profiles", "ao")
        return Profile.from_paths(self._connection, paths)

    async def mode(self) -> DeviceMode:
        return DeviceMode.decode(await self._get("Mode", "s"))

    async def format(self) -> str:
        """Qualifier format, e.g. ``ColorModel.OutputMode.OutputResolution``."""
        return await self._get("Format", "s")

    async def scope(self) -> Scope:
        return Scope.decode(await self._get("Scope", "s"))

    async def owner(self) -> int:
        return await self._get("Owner", "u")

    async def enabled(self) -> bool:
        return await self._get("Enabled", "b")

    async def seat(self) -> str:
        """The seat of the device, or an empty string if unknown."""
        return await self._get("Seat", "s")

    async def embedded(self) -> bool:
        """True for hardware built into the machine, like a laptop panel."""
        return await self._get("Embedded", "b")

    async def metadata(self) -> dict:
        """Device metadata, which may include keys like ``XRANDR_name``."""
        return await self._get("Metadata", "a{ss}")

    async def profiling_inhibitors(self) -> list[str]:
        """Bus names of the clients inhibiting this device, e.g. ``[":1.99"]``."""
        return await self._get("ProfilingInhibitors", "as")
