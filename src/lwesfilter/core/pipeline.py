"""Receive, filter and print loop."""

import logging
import threading
from typing import TextIO

from lwesfilter.core.filters import passes
from lwesfilter.core.models import AttributeConstraint, EventNameFilter
from lwesfilter.core.ports import EventSourcePort
from lwesfilter.core.rendering import render

logger = logging.getLogger(__name__)


class StopToken:
    """Cooperative cancellation flag checked between events.

    Safe to set from a signal handler or another thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def request_stop(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()


def run_pipeline(
    source: EventSourcePort,
    sink: TextIO,
    stop: StopToken,
    name_filter: EventNameFilter | None = None,
    attr_filter: AttributeConstraint | None = None,
) -> int:
    """Pull events from source and write the ones that pass to sink.

    Runs until stop is set. A None from the source is a transient miss and
    does not end the loop. Every received event is released exactly once,
    whether it was printed, dropped, or raised while being processed.

    Args:
        source: Blocking event supply.
        sink: Text stream receiving rendered lines; flushed after each line.
        stop: Checked before every receive.
        name_filter: Optional event name whitelist.
        attr_filter: Optional attribute equality constraint.

    Returns:
        Number of events written.

    Raises:
        FormattingError: If a value cannot be rendered during filtering
            or rendering.
    """
    written = 0
    while not stop.is_set():
        event = source.receive()
        if event is None:
            continue
        try:
            if passes(event, name_filter, attr_filter):
                sink.write(render(event))
                sink.flush()
                written += 1
        finally:
            source.release(event)
    logger.debug("Pipeline stopped after writing %d events", written)
    return written
