#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Asyncio client for the colord color management daemon.
"""
from .config import ClientConfig
from .connection import Connection
from .device import Device
from .errors import (AlreadyExists, BusConnectionError, ColorManagerError, DecodeError,
                     InvalidPathError, NoResponse, NotAuthorized, NotFound, RemoteCallFailure)
from .manager import ColorManager
from .profile import Profile
from .proxy import EntityProxy, path_to_proxy
from .sensor import Sensor, Spectrum
from .types import Capability, DeviceKind, DeviceMode, Relation, Scope, SensorMode
from .version import __version__
