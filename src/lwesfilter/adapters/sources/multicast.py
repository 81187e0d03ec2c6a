"""UDP multicast event source adapter.

Receives LWES datagrams on a multicast group (or a plain unicast
address), decodes them, and tags each event with the listener
attributes ``ReceiptTime``, ``SenderIP`` and ``SenderPort``.
"""

import ipaddress
import logging
import socket
import struct
import time
from types import TracebackType

from lwesfilter.core.encoding.lwes import decode_event
from lwesfilter.core.errors import DecodeError
from lwesfilter.core.models import AttributeValue, Event, Int64, IPv4Address, UInt16

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "224.1.1.11"
DEFAULT_PORT = 12345
DEFAULT_RECEIVE_TIMEOUT = 0.5

# Largest UDP payload over IPv4
MAX_DATAGRAM_SIZE = 65507

RECEIPT_TIME_ATTRIBUTE = "ReceiptTime"
SENDER_IP_ATTRIBUTE = "SenderIP"
SENDER_PORT_ATTRIBUTE = "SenderPort"


class MulticastEventSource:
    """EventSourcePort implementation backed by a UDP socket.

    Multicast groups are joined on the given interface; any other address
    is bound directly, which is handy for unicast senders and tests.

    Example:
        ```python
        with MulticastEventSource("224.1.1.11", 12345) as source:
            run_pipeline(source, sys.stdout, stop)
        ```
    """

    def __init__(
        self,
        group: str = DEFAULT_GROUP,
        port: int = DEFAULT_PORT,
        interface: str | None = None,
        receive_timeout: float | None = DEFAULT_RECEIVE_TIMEOUT,
        listener_attributes: bool = True,
    ) -> None:
        """Open the socket and join the group.

        Args:
            group: Multicast group (or unicast address) to listen on.
            port: UDP port; 0 picks an ephemeral port.
            interface: Local interface address used to join the group.
                None joins on the default interface.
            receive_timeout: Seconds receive() blocks before returning None.
                None blocks until a datagram arrives.
            listener_attributes: Add ReceiptTime, SenderIP and SenderPort
                to every received event.

        Raises:
            OSError: If the socket cannot be bound or the group joined.
            ValueError: If group or interface is not an IPv4 address.
        """
        self._group = ipaddress.IPv4Address(group)
        self._interface = ipaddress.IPv4Address(interface or "0.0.0.0")
        self._listener_attributes = listener_attributes

        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if self._group.is_multicast:
                self._sock.bind(("", port))
                membership = struct.pack(
                    "4s4s", self._group.packed, self._interface.packed
                )
                self._sock.setsockopt(
                    socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership
                )
                logger.info(
                    "Joined multicast group %s on %s port %d",
                    self._group,
                    self._interface,
                    self.address[1],
                )
            else:
                self._sock.bind((str(self._group), port))
                logger.info("Listening on %s port %d", self._group, self.address[1])
            self._sock.settimeout(receive_timeout)
        except OSError:
            self._sock.close()
            raise

    @property
    def address(self) -> tuple[str, int]:
        """Local (host, port) the socket is bound to."""
        host, port = self._sock.getsockname()
        return host, port

    def receive(self) -> Event | None:
        """Receive and decode one datagram.

        Returns:
            The decoded event, or None on timeout, a failed receive, or an
            undecodable datagram.
        """
        try:
            data, (sender_host, sender_port) = self._sock.recvfrom(MAX_DATAGRAM_SIZE)
        except (TimeoutError, InterruptedError):
            return None
        except OSError as exc:
            logger.debug("Receive failed: %s", exc)
            return None

        try:
            event = decode_event(data)
        except DecodeError as exc:
            logger.debug(
                "Dropping datagram from %s:%d: %s", sender_host, sender_port, exc
            )
            return None

        if not self._listener_attributes:
            return event

        attributes: dict[str, AttributeValue] = dict(event.attributes)
        attributes[RECEIPT_TIME_ATTRIBUTE] = Int64(int(time.time() * 1000))
        attributes[SENDER_IP_ATTRIBUTE] = IPv4Address(sender_host)
        attributes[SENDER_PORT_ATTRIBUTE] = UInt16(sender_port)
        return Event(name=event.name, attributes=attributes)

    def release(self, event: Event) -> None:
        """Events hold no socket resources; nothing to free."""

    def close(self) -> None:
        """Close the socket."""
        self._sock.close()

    def __enter__(self) -> "MulticastEventSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
