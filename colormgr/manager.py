#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Proxy for the root org.freedesktop.ColorManager object.
"""

from colormgr.config import ROOT_PATH, ClientConfig
from colormgr.connection import Connection
from colormgr.dbus_utils import object_reference
from colormgr.device import Device
from colormgr.log import Log
from colormgr.profile import Profile
from colormgr.proxy import RemoteObject, path_to_proxy
from colormgr.sensor import Sensor
from colormgr.types import DeviceKind, Scope, encode_enum

_logger = Log.get("colormgr.manager")


def _string_map(properties) -> dict:
    if properties is None:
        return {}
    return {str(k): str(v) for k, v in properties.items()}


def _fileno(handle) -> int:
    if isinstance(handle, int):
        return handle
    if hasattr(handle, "fileno"):
        return handle.fileno()
    raise TypeError("Expected a file descriptor or file object, got %r" % (handle,))


class ColorManager(RemoteObject):
    """
    Entry point to the color manager daemon.

    Use ``await ColorManager.new()`` to connect to the system bus, or pass
    an existing Connection. Lookups return Device, Profile and Sensor
    proxies sharing that connection.
    """

    INTERFACE = "org.freedesktop.ColorManager"

    __slots__ = ("_owns_connection",)

    def __init__(self, connection: Connection):
        super().__init__(connection, ROOT_PATH)
        self._owns_connection = False

    @classmethod
    async def new(cls, config: ClientConfig | None = None) -> "ColorManager":
        """
        Connect to the daemon on a new connection.

        The connection is closed along with the manager.
        """
        manager = cls(await Connection.system(config))
        manager._owns_connection = True
        return manager

    def close(self):
        """Close the connection if it was opened by new()."""
        if self._owns_connection:
            self._connection.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    def _device(self, path: str) -> Device:
        return path_to_proxy(Device, self._connection, path)

    def _profile(self, path: str) -> Profile:
        return path_to_proxy(Profile, self._connection, path)

    def _sensor(self, path: str) -> Sensor:
        return path_to_proxy(Sensor, self._connection, path)

    # ─────────────────────────────────────────────────────────────────────────
    # Listing
    # ─────────────────────────────────────────────────────────────────────────

    async def devices(self) -> list[Device]:
        """All devices known to the daemon, in the order it reports them."""
        return Device.from_paths(self._connection, await self._call_for_paths("GetDevices"))

    async def devices_by_kind(self, kind: DeviceKind | str) -> list[Device]:
        paths = await self._call_for_paths(
            "GetDevicesByKind", "s", (encode_enum(DeviceKind, kind),)
        )
        return Device.from_paths(self._connection, paths)

    async def profiles(self) -> list[Profile]:
        return Profile.from_paths(self._connection, await self._call_for_paths("GetProfiles"))

    async def profiles_by_kind(self, kind: str) -> list[Profile]:
        """Profiles of one kind, e.g. ``display-device``."""
        paths = await self._call_for_paths("GetProfilesByKind", "s", (kind,))
        return Profile.from_paths(self._connection, paths)

    async def sensors(self) -> list[Sensor]:
        return Sensor.from_paths(self._connection, await self._call_for_paths("GetSensors"))

    # ─────────────────────────────────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────────────────────────────────

    async def find_device_by_id(self, device_id: str) -> Device:
        """
        Get the device with a device ID.

        IDs are mangled by the daemon to form object paths, so use this
        rather than guessing the path.

        :raises NotFound: no such device
        """
        return self._device(await self._call_for_path("FindDeviceById", "s", (device_id,)))

    async def find_sensor_by_id(self, sensor_id: str) -> Sensor:
        return self._sensor(await self._call_for_path("FindSensorById", "s", (sensor_id,)))

    async def find_device_by_property(self, key: str, value: str) -> Device:
        return self._device(
            await self._call_for_path("FindDeviceByProperty", "ss", (key, value))
        )

    async def find_profile_by_id(self, profile_id: str) -> Profile:
        return self._profile(await self._call_for_path("FindProfileById", "s", (profile_id,)))

    async def find_profile_by_property(self, key: str, value: str) -> Profile:
        return self._profile(
            await self._call_for_path("FindProfileByProperty", "ss", (key, value))
        )

    async def find_profile_by_filename(self, filename: str) -> Profile:
        """Look up a profile by full path or by basename."""
        return self._profile(
            await self._call_for_path("FindProfileByFilename", "s", (filename,))
        )

    async def standard_space(self, name: str) -> Profile:
        """
        Get the profile registered for a standard space such as ``srgb``.

        The space comes from the ``STANDARD_space`` profile metadata, and
        only system-wide profiles may define one.
        """
        return self._profile(await self._call_for_path("GetStandardSpace", "s", (name,)))

    # ─────────────────────────────────────────────────────────────────────────
    # Creation and removal
    # ─────────────────────────────────────────────────────────────────────────

    async def create_profile(
        self, profile_id: str, scope: Scope | str, properties: dict | None = None
    ) -> Profile:
        """
        Register a profile without passing its file.

        Prefer create_profile_with_fd(): the daemon may not be able to
        read files in the user's home directory.
        """
        path = await self._call_for_path(
            "CreateProfile",
            "ssa{ss}",
            (profile_id, encode_enum(Scope, scope), _string_map(properties)),
        )
        return self._profile(path)

    async def create_profile_with_fd(
        self, profile_id: str, scope: Scope | str, handle, properties: dict | None = None
    ) -> Profile:
        """
        Register a profile, passing its file descriptor alongside the call.

        The daemon parses the ICC data from the descriptor instead of
        opening the file itself, so files it has no permission to open
        still work.

        If the profile was assigned to a device in the past and that device
        exists, the profile is assigned again straight away. Call
        Device.remove_profile() to undo that.

        :param handle: an open file object or a raw file descriptor
        """
        fd = _fileno(handle)
        _logger.debug("Creating profile %s from fd %d", profile_id, fd)
        path = await self._call_for_path(
            "CreateProfileWithFd",
            "ssha{ss}",
            (profile_id, encode_enum(Scope, scope), 0, _string_map(properties)),
            unix_fds=(fd,),
        )
        return self._profile(path)

    async def create_device(
        self, device_id: str, scope: Scope | str, properties: dict | None = None
    ) -> Device:
        """
        Register a device.

        Profiles assigned to a device with this ID in the past are added
        again if they exist. Call Device.remove_profile() to undo that.
        """
        path = await self._call_for_path(
            "CreateDevice",
            "ssa{ss}",
            (device_id, encode_enum(Scope, scope), _string_map(properties)),
        )
        return self._device(path)

    async def delete_device(self, device: Device):
        await self._call("DeleteDevice", "o", (object_reference(device),))

    async def delete_profile(self, profile: Profile):
        await self._call("DeleteProfile", "o", (object_reference(profile),))

    # ─────────────────────────────────────────────────────────────────────────
    # Signals
    #
    # Each method waits for the next emission only. Signals sent before
    # the call are not seen; call again to wait for the following one.
    # ─────────────────────────────────────────────────────────────────────────

    async def changed(self):
        """Wait until a value or the set of devices or profiles changes."""
        await self._wait_signal("Changed")

    async def device_added(self) -> Device:
        return self._device(await self._wait_signal_path("DeviceAdded"))

    async def device_removed(self) -> Device:
        return self._device(await self._wait_signal_path("DeviceRemoved"))

    async def device_changed(self) -> Device:
        return self._device(await self._wait_signal_path("DeviceChanged"))

    async def profile_added(self) -> Profile:
        return self._profile(await self._wait_signal_path("ProfileAdded"))

    async def profile_removed(self) -> Profile:
        return self._profile(await self._wait_signal_path("ProfileRemoved"))

    async def profile_changed(self) -> Profile:
        return self._profile(await self._wait_signal_path("ProfileChanged"))

    async def sensor_added(self) -> Sensor:
        return self._sensor(await self._wait_signal_path("SensorAdded"))

    async def sensor_removed(self) -> Sensor:
        return self._sensor(await self._wait_signal_path("SensorRemoved"))

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    async def daemon_version(self) -> str:
        return await self._get("DaemonVersion", "s")

    async def system_vendor(self) -> str:
        return await self._get("SystemVendor", "s")

    async def system_model(self) -> str:
        return await self._get("SystemModel", "s")
