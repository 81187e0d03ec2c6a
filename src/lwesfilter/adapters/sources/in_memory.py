"""In-memory event source adapter."""

from collections import deque
from collections.abc import Iterable

from lwesfilter.core.models import Event
from lwesfilter.core.pipeline import StopToken


class InMemoryEventSource:
    """In-memory implementation of EventSourcePort.

    Replays a fixed sequence of items, where None stands for a round in
    which nothing was received. Once the items run out the stop token is
    set, so a pipeline driven by this source terminates. Suitable for
    testing and for embedding the filter in other programs.

    Args:
        items: Events (or None) to hand out in order.
        stop: Token to set when the items are exhausted.
    """

    def __init__(self, items: Iterable[Event | None], stop: StopToken) -> None:
        self._pending: deque[Event | None] = deque(items)
        self._stop = stop
        self.released: list[Event] = []

    def receive(self) -> Event | None:
        """Return the next item, or None after requesting a stop."""
        if not self._pending:
            self._stop.request_stop()
            return None
        item = self._pending.popleft()
        if not self._pending:
            self._stop.request_stop()
        return item

    def release(self, event: Event) -> None:
        """Record that the event was released."""
        self.released.append(event)
