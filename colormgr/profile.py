#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Proxy for org.freedesktop.ColorManager.Profile objects.
"""

from colormgr.proxy import EntityProxy
from colormgr.types import Scope


class Profile(EntityProxy):
    """
    A color profile registered with the daemon.
    """

    INTERFACE = "org.freedesktop.ColorManager.Profile"

    __slots__ = ()

    async def set_property(self, name: str, value: str):
        """Set a property on the profile, e.g. ``Qualifier``."""
        await self._call("SetProperty", "ss", (name, value))

    async def install_system_wide(self):
        """
        Copy the profile system-wide so it is available to all users,
        and when nobody is logged in.

        There is no call to undo this.
        """
        await self._call("InstallSystemWide")

    async def changed(self):
        """Wait until some value on this profile changes."""
        await self._wait_signal("Changed")

    async def profile_id(self) -> str:
        """The identification hash of the profile."""
        return await self._get("ProfileId", "s")

    async def title(self) -> str:
        return await self._get("Title", "s")

    async def metadata(self) -> dict:
        """
        Profile metadata, which may include keys like ``EDID_md5`` and
        ``EDID_manufacturer`` set by several CMS frameworks.
        """
        return await self._get("Metadata", "a{ss}")

    async def qualifier(self) -> str:
        """
        Qualifier used to select this profile for a device, either free
        text like ``High quality studio`` or structured like
        ``RGB.Plain.300dpi``.
        """
        return await self._get("Qualifier", "s")

    async def format(self) -> str:
        return await self._get("Format", "s")

    async def kind(self) -> str:
        """e.g. ``colorspace-conversion``, ``abstract`` or ``display-device``"""
        return await self._get("Kind", "s")

    async def colorspace(self) -> str:
        return await self._get("Colorspace", "s")

    async def has_vcgt(self) -> bool:
        return await self._get("HasVcgt", "b")

    async def is_system_wide(self) -> bool:
        return await self._get("IsSystemWide", "b")

    async def filename(self) -> str:
        """The backing file, or an empty string for profiles without one."""
        return await self._get("Filename", "s")

    async def created(self) -> int:
        """
        Creation time in UNIX time.

        This is the date encoded inside the ICC data. It is not the time
        the profile was registered with the daemon, nor the file's mtime.
        """
        return await self._get("Created", ("x", "t"))

    async def scope(self) -> Scope:
        return Scope.decode(await self._get("Scope", "s"))

    async def owner(self) -> int:
        """User ID of the account that created the profile."""
        return await self._get("Owner", "u")

    async def warnings(self) -> list[str]:
        """Free-form warnings, e.g. ``description-missing``."""
        return await self._get("Warnings", "as")
