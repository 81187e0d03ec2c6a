"""Port interfaces for event sources.

The pipeline depends only on this protocol, not on a concrete transport.
"""

from typing import Protocol, runtime_checkable

from lwesfilter.core.models import Event


@runtime_checkable
class EventSourcePort(Protocol):
    """Port for a blocking supply of decoded events.

    Examples: MulticastEventSource, InMemoryEventSource.
    """

    def receive(self) -> Event | None:
        """Block until the next event is available.

        Returns:
            The decoded event, or None when nothing was received this
            round (timeout, interrupted call, undecodable datagram).
        """
        ...

    def release(self, event: Event) -> None:
        """Release an event returned by receive().

        Called exactly once per received event once it has been
        filtered and, if it passed, rendered.
        """
        ...
