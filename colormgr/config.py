#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Client configuration taken from the environment.

The defaults talk to colord on the system bus. The overrides exist
for running against a mock daemon on a private or session bus.
"""
import os

from typing import NamedTuple

from dbus_fast import BusType


SERVICE = "org.freedesktop.ColorManager"
ROOT_PATH = "/org/freedesktop/ColorManager"

ENV_BUS_ADDRESS = "COLORMGR_BUS_ADDRESS"
ENV_SESSION_BUS = "COLORMGR_SESSION_BUS"
ENV_SERVICE = "COLORMGR_SERVICE"
ENV_LOG_COLOR = "COLORMGR_LOG_COLOR"
ENV_LOG_LEVEL = "COLORMGR_LOG_LEVEL"

_FALSE_VALUES = ("", "0", "false", "no", "off")


def _env_flag(environ, key: str) -> bool:
    value = environ.get(key)
    if value is None:
        return False
    return value.strip().lower() not in _FALSE_VALUES


class ClientConfig(NamedTuple):
    """
    Settings used when the library opens its own connection
    """
    bus_type: BusType = BusType.SYSTEM
    bus_address: str = None
    service: str = SERVICE
    log_color: bool = False
    log_level: str = None


    @classmethod
    def from_env(cls, environ=None) -> "ClientConfig":
        """
        Build a configuration from COLORMGR_* environment variables

        :param environ: mapping to read instead of os.environ
        """
        if environ is None:
            environ = os.environ

        bus_type = BusType.SESSION if _env_flag(environ, ENV_SESSION_BUS) else BusType.SYSTEM

        return cls(bus_type=bus_type,
                   bus_address=environ.get(ENV_BUS_ADDRESS) or None,
                   service=environ.get(ENV_SERVICE) or SERVICE,
                   log_color=_env_flag(environ, ENV_LOG_COLOR),
                   log_level=environ.get(ENV_LOG_LEVEL) or None)
