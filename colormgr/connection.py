#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Bus session shared by every proxy.

A Connection wraps one dbus-fast MessageBus. Any number of proxies may
issue calls through it concurrently; each call is an independent round
trip and nothing is cached. Signals are consumed one at a time: a wait
only sees signals emitted after it subscribed.
"""

import asyncio

from dbus_fast import BusType, Message, MessageType
from dbus_fast.aio import MessageBus
from dbus_fast.errors import AuthError, InvalidAddressError
from frozendict import frozendict

from colormgr.config import SERVICE, ClientConfig
from colormgr.dbus_utils import check_signature, unwrap_variants
from colormgr.errors import BusConnectionError, NoResponse, RemoteCallFailure
from colormgr.log import LOG_PROTOCOL_TRACE, Log
from colormgr.util import ensure_future

DBUS_SERVICE = "org.freedesktop.DBus"
DBUS_PATH = "/org/freedesktop/DBus"
DBUS_INTERFACE = "org.freedesktop.DBus"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

_logger = Log.get("colormgr.connection")


def signal_match_rule(sender: str, path: str, interface: str, member: str) -> str:
    """Build a bus match rule for one signal on one object."""
    return "type='signal',sender='%s',path='%s',interface='%s',member='%s'" % (
        sender,
        path,
        interface,
        member,
    )


class Connection:
    """
    Session to the bus carrying the color manager service.

    Use Connection.connect() or Connection.system() to open a new bus
    session, or pass an already connected MessageBus to the constructor.
    """

    def __init__(self, bus: MessageBus, service: str = SERVICE):
        self._bus = bus
        self._service = service
        self._waiters: set[asyncio.Future] = set()
        self._disconnect_monitor: asyncio.Future | None = None
        self._cleanup_tasks: set[asyncio.Future] = set()
        self._closed = False

    @classmethod
    async def connect(
        cls,
        bus_type: BusType = BusType.SYSTEM,
        bus_address: str | None = None,
        service: str = SERVICE,
    ) -> "Connection":
        """
        Open a new bus session.

        :param bus_type: the well-known bus to use when no address is given
        :param bus_address: explicit bus address, e.g. unix:path=/run/test-bus
        :param service: name of the color manager on that bus
        :raises BusConnectionError: the bus is unreachable or refused us
        """
        where = bus_address or bus_type.name.lower()
        try:
            bus = await MessageBus(
                bus_address=bus_address, bus_type=bus_type, negotiate_unix_fd=True
            ).connect()
        except (AuthError, InvalidAddressError, OSError, EOFError) as err:
            raise BusConnectionError(
                "Unable to connect to the %s bus: %s" % (where, err)
            ) from err

        _logger.debug("Connected to the %s bus as %s", where, bus.unique_name)
        return cls(bus, service=service)

    @classmethod
    async def system(cls, config: ClientConfig | None = None) -> "Connection":
        """
        Open the default connection to colord.

        Settings come from the COLORMGR_* environment variables unless
        a ClientConfig is given.
        """
        if config is None:
            config = ClientConfig.from_env()

        if config.log_level is not None or config.log_color:
            Log.configure(level=config.log_level, color=config.log_color or None)

        return await cls.connect(
            bus_type=config.bus_type,
            bus_address=config.bus_address,
            service=config.service,
        )

    @property
    def bus(self) -> MessageBus:
        """The underlying dbus-fast bus."""
        return self._bus

    @property
    def service(self) -> str:
        """Destination for all calls made through this connection."""
        return self._service

    @property
    def unique_name(self) -> str | None:
        return self._bus.unique_name

    @property
    def closed(self) -> bool:
        return self._closed or not self._bus.connected

    def close(self):
        """
        Disconnect from the bus.

        Pending signal waits fail with NoResponse straight away, calls
        still in flight fail with BusConnectionError.
        """
        if self._closed:
            return
        self._closed = True
        _logger.debug("Closing connection %s", self._bus.unique_name)
        if self._bus.connected:
            self._bus.disconnect()
        self._fail_waiters("Connection closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    # ─────────────────────────────────────────────────────────────────────────
    # Method calls
    # ─────────────────────────────────────────────────────────────────────────

    async def _send(self, message: Message, reply_signature) -> list:
        if self.closed:
            raise BusConnectionError("Connection is closed")

        _logger.log(
            LOG_PROTOCOL_TRACE,
            "-> %s %s.%s(%s) %r",
            message.path,
            message.interface,
            message.member,
            message.signature,
            message.body,
        )

        try:
            reply = await self._bus.call(message)
        except Exception as err:
            if self._bus.connected:
                raise
            raise BusConnectionError(
                "Connection lost during %s" % message.member
            ) from err

        if reply.message_type == MessageType.ERROR:
            text = ""
            if reply.body and isinstance(reply.body[0], str):
                text = reply.body[0]
            _logger.debug(
                "%s on %s failed: %s %s", message.member, message.path, reply.error_name, text
            )
            raise RemoteCallFailure.from_error(reply.error_name, text, message.member)

        _logger.log(LOG_PROTOCOL_TRACE, "<- %s(%s) %r", message.member, reply.signature, reply.body)

        check_signature(reply.signature, reply_signature, "%s reply" % message.member)
        return reply.body

    async def call(
        self,
        path: str,
        interface: str,
        member: str,
        signature: str = "",
        body=(),
        reply_signature="",
        unix_fds=(),
    ) -> list:
        """
        Invoke a method on the color manager service.

        :param path: object path of the remote object
        :param interface: interface declaring the method
        :param member: method name, exactly as on the wire
        :param signature: signature of body
        :param body: the arguments
        :param reply_signature: expected reply signature, or a tuple of them
        :param unix_fds: file descriptors referenced by index from body
        :return: the reply body
        :raises RemoteCallFailure: the service returned an error
        :raises DecodeError: the reply has an unexpected signature
        :raises BusConnectionError: the connection is closed or was lost
        """
        _logger.debug("Calling %s.%s on %s", interface, member, path)

        message = Message(
            destination=self._service,
            path=path,
            interface=interface,
            member=member,
            signature=signature,
            body=list(body),
            unix_fds=list(unix_fds),
        )
        return await self._send(message, reply_signature)

    async def get_property(self, path: str, interface: str, name: str, signatures):
        """
        Read one property. There is no cache, every read is a round trip.

        :param signatures: acceptable variant signature(s) of the value
        :return: the property value
        """
        body = await self.call(
            path, PROPERTIES_INTERFACE, "Get", "ss", (interface, name), reply_signature="v"
        )
        variant = body[0]
        check_signature(variant.signature, signatures, "%s.%s" % (interface, name))
        return variant.value

    async def get_all_properties(self, path: str, interface: str) -> frozendict:
        """Read every property of an interface in one round trip."""
        body = await self.call(
            path, PROPERTIES_INTERFACE, "GetAll", "s", (interface,), reply_signature="a{sv}"
        )
        return frozendict(unwrap_variants(body[0]))

    # ─────────────────────────────────────────────────────────────────────────
    # Signals
    # ─────────────────────────────────────────────────────────────────────────

    async def _bus_method(self, member: str, arg: str, reply_signature: str = "") -> list:
        message = Message(
            destination=DBUS_SERVICE,
            path=DBUS_PATH,
            interface=DBUS_INTERFACE,
            member=member,
            signature="s",
            body=[arg],
        )
        return await self._send(message, reply_signature)

    async def _service_owner(self) -> str:
        """Unique bus name currently owning the service."""
        if self._service.startswith(":"):
            return self._service
        body = await self._bus_method("GetNameOwner", self._service, reply_signature="s")
        return body[0]

    async def _remove_match(self, rule: str):
        if self.closed:
            return
        try:
            await self._bus_method("RemoveMatch", rule)
        except (RemoteCallFailure, BusConnectionError) as err:
            _logger.warning("Unable to remove match rule %s: %s", rule, err)

    def _start_disconnect_monitor(self):
        if self._disconnect_monitor is None:
            self._disconnect_monitor = ensure_future(self._monitor_disconnect())

    async def _monitor_disconnect(self):
        """Fail pending signal waits once the bus goes away."""
        try:
            await self._bus.wait_for_disconnect()
        except Exception as err:
            _logger.debug("Bus disconnected with error: %s", err)

        if not self._closed:
            _logger.warning("Connection to the bus lost")
        self._fail_waiters("Connection lost")

    def _fail_waiters(self, reason: str):
        waiters, self._waiters = self._waiters, set()
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(NoResponse(reason))

    async def wait_for_signal(
        self, path: str, interface: str, member: str, signature=None
    ) -> list:
        """
        Wait for the next emission of a signal on one object.

        Only signals emitted after this call subscribed are seen. Call
        again to wait for the following one.

        Signals from peers other than the current owner of the service
        are ignored, even if another match rule on the bus lets them in.

        :param signature: expected signal signature(s), if checked
        :return: the signal body
        :raises NoResponse: the connection closed before the signal arrived
        """
        if self.closed:
            raise NoResponse("Connection is closed")

        future = asyncio.get_running_loop().create_future()
        owner = None

        def handler(message: Message):
            if (
                message.message_type == MessageType.SIGNAL
                and message.sender == owner
                and message.path == path
                and message.interface == interface
                and message.member == member
                and not future.done()
            ):
                future.set_result(message)

        rule = signal_match_rule(self._service, path, interface, member)

        self._waiters.add(future)
        self._start_disconnect_monitor()
        handler_added = False
        subscribed = False
        try:
            try:
                owner = await self._service_owner()
                self._bus.add_message_handler(handler)
                handler_added = True
                await self._bus_method("AddMatch", rule)
            except BusConnectionError as err:
                if future.done() and not future.cancelled() and future.exception() is not None:
                    raise future.exception() from err
                raise NoResponse("Connection closed while subscribing to %s" % member) from err
            subscribed = True
            _logger.debug("Waiting for %s.%s on %s from %s", interface, member, path, owner)
            message = await future
        finally:
            self._waiters.discard(future)
            if handler_added:
                self._bus.remove_message_handler(handler)
            if not future.done():
                future.cancel()
            elif not future.cancelled():
                # marks a NoResponse set by close() as retrieved
                future.exception()
            if subscribed:
                task = ensure_future(self._remove_match(rule))
                self._cleanup_tasks.add(task)
                task.add_done_callback(self._cleanup_tasks.discard)

        if signature is not None:
            check_signature(message.signature, signature, "%s signal" % member)
        return message.body
