"""Process signal wiring for cooperative shutdown."""

import logging
import signal
from collections.abc import Iterable
from types import FrameType

from lwesfilter.core.pipeline import StopToken

logger = logging.getLogger(__name__)

DEFAULT_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def install_stop_handlers(
    stop: StopToken,
    signals: Iterable[signal.Signals] = DEFAULT_STOP_SIGNALS,
) -> dict[signal.Signals, object]:
    """Make the given signals request a stop instead of killing the process.

    Must be called from the main thread.

    Args:
        stop: Token set when one of the signals arrives.
        signals: Signals to handle (default SIGINT and SIGTERM).

    Returns:
        The previous handlers, keyed by signal, for restore_handlers().
    """

    def _handler(signum: int, frame: FrameType | None) -> None:
        stop.request_stop()

    previous: dict[signal.Signals, object] = {}
    for sig in signals:
        previous[sig] = signal.signal(sig, _handler)
    logger.debug("Stop requested on %s", ", ".join(sig.name for sig in previous))
    return previous


def restore_handlers(previous: dict[signal.Signals, object]) -> None:
    """Reinstall handlers returned by install_stop_handlers()."""
    for sig, handler in previous.items():
        signal.signal(sig, handler)  # type: ignore[arg-type]
