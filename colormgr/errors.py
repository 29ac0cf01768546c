#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Exceptions raised by the binding.

Nothing here is retried or recovered locally; every failure
reaches the caller.
"""


class ColorManagerError(Exception):
    """
    Base class for all errors raised by colormgr
    """


class BusConnectionError(ColorManagerError, ConnectionError):
    """
    The bus session could not be established, or was lost
    """


class RemoteCallFailure(ColorManagerError):
    """
    The daemon answered a method call with an error reply

    :param error_name: D-Bus error name, e.g. org.freedesktop.ColorManager.NotFound
    :param text: the human readable message sent along with the error
    """

    def __init__(self, error_name: str, text: str="", member: str=None):
        self.error_name = error_name
        self.text = text
        self.member = member

        msg = error_name
        if member is not None:
            msg = "%s failed: %s" % (member, error_name)
        if text:
            msg = "%s (%s)" % (msg, text)
        super().__init__(msg)


    @staticmethod
    def from_error(error_name: str, text: str="", member: str=None) -> "RemoteCallFailure":
        """
        Build the most specific failure type for a D-Bus error name
        """
        suffix = error_name.rsplit(".", 1)[-1] if error_name else ""
        cls = _ERROR_SUFFIXES.get(suffix, RemoteCallFailure)
        return cls(error_name, text, member)


class NotFound(RemoteCallFailure):
    """
    A lookup matched no device, profile or sensor
    """


class AlreadyExists(RemoteCallFailure):
    """
    The object being created is already registered
    """


class NotAuthorized(RemoteCallFailure):
    """
    The daemon refused the call for this user
    """


class NoResponse(ColorManagerError):
    """
    A signal subscription ended before the signal arrived
    """


class DecodeError(ColorManagerError):
    """
    A reply did not have the expected shape
    """


class InvalidPathError(ColorManagerError, ValueError):
    """
    A string which is not a valid D-Bus object path was used as one
    """


_ERROR_SUFFIXES = {
    "NotFound": NotFound,
    "AlreadyExists": AlreadyExists,
    "FailedToAuthenticate": NotAuthorized,
    "AccessDenied": NotAuthorized,
}
