#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name
"""
Enumerations which travel over the bus as lowercase strings.

Decoding never fails. Newer daemons may report values this
library does not know about, and those decode to the default
member of the enumeration.
"""
from enum import Enum

from dbus_fast import Variant


class WireEnum(Enum):
    """
    Base class for string enumerations exchanged with the daemon

    Subclasses list their members with the wire string as value
    and implement default().
    """

    @classmethod
    def default(cls) -> "WireEnum":
        raise NotImplementedError


    @classmethod
    def _missing_(cls, value):
        return cls.default()


    @classmethod
    def decode(cls, value) -> "WireEnum":
        """
        Get the member for a wire value, or the default member

        :param value: a string, a Variant holding a string, or a member
        """
        if isinstance(value, Variant):
            value = value.value
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.default()
        return cls(value)


    def encode(self) -> str:
        """
        The string sent over the bus for this member
        """
        return self.value


    def __str__(self):
        return self.value


def encode_enum(enum_type, value) -> str:
    """
    Encode a member, or pass through a plain string

    Strings are not checked against the members so callers can use
    values a newer daemon understands.
    """
    if isinstance(value, enum_type):
        return value.encode()
    if isinstance(value, str):
        return value
    raise TypeError("Expected %s or str, got %r" % (enum_type.__name__, value))


class Scope(WireEnum):
    """
    Lifetime of a device or profile inside the daemon

    NORMAL objects live until the session ends, TEMP objects until the
    creating client disconnects, DISK objects are persisted.
    """
    NORMAL = "normal"
    TEMP = "temp"
    DISK = "disk"

    @classmethod
    def default(cls):
        return cls.NORMAL


class DeviceKind(WireEnum):
    SCANNER = "scanner"
    DISPLAY = "display"
    CAMERA = "camera"
    PRINTER = "printer"
    WEBCAM = "webcam"

    @classmethod
    def default(cls):
        return cls.DISPLAY


class DeviceMode(WireEnum):
    """
    Whether a device is backed by hardware

    VIRTUAL devices represent abstract targets such as a photo lab,
    PHYSICAL devices are attached hardware.
    """
    VIRTUAL = "virtual"
    PHYSICAL = "physical"
    UNKNOWN = "unknown"

    @classmethod
    def default(cls):
        return cls.UNKNOWN


class SensorMode(WireEnum):
    AMBIENT = "ambient"
    PRINTER = "printer"
    UNKNOWN = "unknown"

    @classmethod
    def default(cls):
        return cls.UNKNOWN


class Capability(WireEnum):
    """
    What a sensor is asked to measure
    """
    CRT = "crt"
    AMBIENT = "ambient"
    LCD = "lcd"
    LED = "led"
    PROJECTOR = "projector"
    UNKNOWN = "unknown"

    @classmethod
    def default(cls):
        return cls.UNKNOWN


class Relation(WireEnum):
    """
    How a profile was assigned to a device

    SOFT assignments were made automatically, HARD ones explicitly.
    """
    SOFT = "soft"
    HARD = "hard"

    @classmethod
    def default(cls):
        return cls.HARD
