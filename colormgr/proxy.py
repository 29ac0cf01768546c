#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
# pylint: disable=protected-access
"""
Base classes for proxies of remote color manager objects.

A proxy is only a handle: connection, interface and object path. It
holds no property values, so every read reflects the daemon's current
state, and a proxy whose remote object is gone fails on its next call.
"""

from collections.abc import Iterable
from typing import TypeVar

from frozendict import frozendict

from colormgr.connection import Connection
from colormgr.dbus_utils import Referenceable, check_object_path
from colormgr.util import camel_to_snake

P = TypeVar("P", bound="EntityProxy")


class RemoteObject(Referenceable):
    """
    One interface of one object exported by the color manager.
    """

    INTERFACE: str = None

    __slots__ = ("_connection", "_path")

    def __init__(self, connection: Connection, path: str):
        self._connection = connection
        self._path = check_object_path(path)

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def path(self) -> str:
        return self._path

    @property
    def interface(self) -> str:
        return self.INTERFACE

    @property
    def destination(self) -> str:
        return self._connection.service

    def __eq__(self, other):
        if not isinstance(other, RemoteObject):
            return NotImplemented
        return (self.interface, self._path) == (other.interface, other._path)

    def __hash__(self):
        return hash((self.interface, self._path))

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self._path)

    async def _call(self, member: str, signature: str = "", body=(), reply_signature="", unix_fds=()):
        return await self._connection.call(
            self._path,
            self.INTERFACE,
            member,
            signature=signature,
            body=body,
            reply_signature=reply_signature,
            unix_fds=unix_fds,
        )

    async def _call_for_path(self, member: str, signature: str = "", body=(), unix_fds=()) -> str:
        """Call a method which replies with a single object path."""
        reply = await self._call(member, signature, body, reply_signature="o", unix_fds=unix_fds)
        return reply[0]

    async def _call_for_paths(self, member: str, signature: str = "", body=()) -> list:
        """Call a method which replies with an array of object paths."""
        reply = await self._call(member, signature, body, reply_signature="ao")
        return reply[0]

    async def _get(self, name: str, signatures):
        return await self._connection.get_property(self._path, self.INTERFACE, name, signatures)

    async def _wait_signal(self, member: str, signature=None) -> list:
        return await self._connection.wait_for_signal(
            self._path, self.INTERFACE, member, signature=signature
        )

    async def _wait_signal_path(self, member: str) -> str:
        """Wait for a signal which carries a single object path."""
        body = await self._wait_signal(member, signature="o")
        return body[0]

    async def get_all(self) -> frozendict:
        """
        Read every property of this object at once.

        Keys are the snake_case accessor names, e.g. ``profiling_inhibitors``
        for the ``ProfilingInhibitors`` property. Values are returned as sent
        by the daemon, without enum or proxy decoding.
        """
        props = await self._connection.get_all_properties(self._path, self.INTERFACE)
        return frozendict({camel_to_snake(k): v for k, v in props.items()})


class EntityProxy(RemoteObject):
    """
    Proxy for a device, profile or sensor identified by an object path.

    Object paths are chosen by the daemon and are used as given.
    """

    __slots__ = ()

    @classmethod
    def from_paths(cls: type[P], connection: Connection, paths: Iterable[str]) -> list[P]:
        """Build proxies for a list of paths, keeping their order."""
        return [path_to_proxy(cls, connection, path) for path in paths]


def path_to_proxy(proxy_type: type[P], connection: Connection, path: str) -> P:
    """
    Create a proxy of the given type for an object path.

    :raises InvalidPathError: path is not a valid object path
    """
    return proxy_type(connection, path)

