#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Proxy for org.freedesktop.ColorManager.Sensor objects.
"""

from typing import NamedTuple

from colormgr.dbus_utils import prepare_variant_map, unwrap_variants
from colormgr.errors import DecodeError
from colormgr.proxy import EntityProxy
from colormgr.types import Capability, SensorMode, encode_enum


class Spectrum(NamedTuple):
    """A spectral reading: wavelength range in nm and evenly spaced samples."""

    start: float
    end: float
    values: list[float]


def _flatten_struct(body: list) -> list:
    # replies may arrive as one struct or as separate arguments
    if len(body) == 1 and isinstance(body[0], (list, tuple)):
        return list(body[0])
    return list(body)


class Sensor(EntityProxy):
    """
    A colorimeter or spectrometer managed by the daemon.
    """

    INTERFACE = "org.freedesktop.ColorManager.Sensor"

    __slots__ = ()

    async def lock(self):
        """
        Lock the sensor for this client.

        The lock belongs to this connection and is released by the daemon
        if the connection goes away without unlock().
        """
        await self._call("Lock")

    async def unlock(self):
        await self._call("Unlock")

    async def sample(self, capability: Capability) -> tuple[float, float, float]:
        """Take a color reading, returned as XYZ."""
        reply = await self._call(
            "GetSample",
            "s",
            (encode_enum(Capability, capability),),
            reply_signature=("(ddd)", "ddd"),
        )
        values = _flatten_struct(reply)
        if len(values) != 3:
            raise DecodeError("GetSample: expected 3 values, got %d" % len(values))
        return tuple(float(x) for x in values)

    async def spectrum(self, capability: Capability) -> Spectrum:
        reply = await self._call(
            "GetSpectrum",
            "s",
            (encode_enum(Capability, capability),),
            reply_signature=("(ddad)", "ddad"),
        )
        fields = _flatten_struct(reply)
        if len(fields) != 3:
            raise DecodeError("GetSpectrum: expected 3 fields, got %d" % len(fields))
        start, end, values = fields
        return Spectrum(float(start), float(end), [float(x) for x in values])

    async def set_options(self, options: dict):
        """
        Set one or more options on the sensor.

        Values may be of any type the bus can carry; which keys and types
        are accepted is up to the sensor driver.
        """
        await self._call("SetOptions", "a{sv}", (prepare_variant_map(options),))

    async def button_pressed(self):
        """Wait until a button on the sensor is pressed."""
        await self._wait_signal("ButtonPressed")

    async def sensor_id(self) -> str:
        return await self._get("SensorId", "s")

    async def kind(self) -> str:
        """The sensor type, e.g. ``colormunki``."""
        return await self._get("Kind", "s")

    async def state(self) -> str:
        """e.g. ``starting``, ``idle`` or ``measuring``"""
        return await self._get("State", "s")

    async def mode(self) -> SensorMode:
        """
        The position the sensor is in.

        Some sensors must be moved to a specific position before a reading
        can be taken.
        """
        return SensorMode.decode(await self._get("Mode", "s"))

    async def serial(self) -> str:
        return await self._get("Serial", "s")

    async def model(self) -> str:
        return await self._get("Model", "s")

    async def vendor(self) -> str:
        return await self._get("Vendor", "s")

    async def native(self) -> bool:
        """True if the daemon drives the sensor without external tools."""
        return await self._get("Native", "b")

    async def locked(self) -> bool:
        return await self._get("Locked", "b")

    async def capabilities(self) -> list[str]:
        """e.g. ``['display', 'printer', 'projector', 'spot']``"""
        return await self._get("Capabilities", "as")

    async def options(self) -> dict:
        return unwrap_variants(await self._get("Options", "a{sv}"))

    async def metadata(self) -> dict:
        return await self._get("Metadata", "a{ss}")
