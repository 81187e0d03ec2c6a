"""Command-line entry point: ``lwes-filter-listener``.

Listens for LWES events and prints the ones matching ``-e`` and ``-a``
to standard output, one line per event. Diagnostics go to standard error.
"""

import argparse
import ipaddress
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NoReturn, TextIO

from lwesfilter.adapters.signals import install_stop_handlers, restore_handlers
from lwesfilter.adapters.sources.multicast import (
    DEFAULT_GROUP,
    DEFAULT_PORT,
    DEFAULT_RECEIVE_TIMEOUT,
    MulticastEventSource,
)
from lwesfilter.core.errors import FilterSpecError, FormattingError
from lwesfilter.core.models import AttributeConstraint, EventNameFilter
from lwesfilter.core.parsing import build_attribute_constraint, build_name_filter
from lwesfilter.core.pipeline import StopToken, run_pipeline
from lwesfilter.core.ports import EventSourcePort

logger = logging.getLogger(__name__)

PROG = "lwes-filter-listener"
LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"

# Exit statuses
EXIT_OK = 0
EXIT_FAILURE = 1

_VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

_EPILOG = "arguments are specified as -option value or -optionvalue"


@dataclass(frozen=True)
class ListenerConfig:
    """Settings for one listener run, built from the command line."""

    group: str = DEFAULT_GROUP
    port: int = DEFAULT_PORT
    interface: str | None = None
    receive_timeout: float = DEFAULT_RECEIVE_TIMEOUT
    name_filter: EventNameFilter | None = None
    attr_filter: AttributeConstraint | None = None
    verbosity: int = 0


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _ipv4(text: str) -> str:
    return str(ipaddress.IPv4Address(text))


def _port(text: str) -> int:
    port = int(text)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Help is handled by main() so that it can go to stderr with status 1.
    """
    parser = _ArgumentParser(
        prog=PROG,
        description="Print LWES events that match the given filters.",
        epilog=_EPILOG,
        add_help=False,
    )
    parser.add_argument(
        "-m",
        dest="group",
        type=_ipv4,
        default=DEFAULT_GROUP,
        metavar="ADDR",
        help=f"The multicast ip address to listen on. (default: {DEFAULT_GROUP})",
    )
    parser.add_argument(
        "-p",
        dest="port",
        type=_port,
        default=DEFAULT_PORT,
        metavar="PORT",
        help=f"The ip port to listen on. (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "-i",
        dest="interface",
        type=_ipv4,
        default=None,
        metavar="ADDR",
        help="The interface to listen on. (default: 0.0.0.0)",
    )
    parser.add_argument(
        "-e",
        dest="events",
        default="",
        metavar="LIST",
        help="Comma separated list of events to print out.",
    )
    parser.add_argument(
        "-a",
        dest="attributes",
        default="",
        metavar="PAIRS",
        help="Comma separated key=value pairs to check before printing the event.",
    )
    parser.add_argument(
        "-v",
        dest="verbosity",
        action="count",
        default=0,
        help="Log more to stderr; repeat for debug output.",
    )
    parser.add_argument(
        "-h",
        dest="help",
        action="store_true",
        help="Show this message.",
    )
    return parser


def build_config(args: argparse.Namespace) -> ListenerConfig:
    """Turn parsed arguments into a ListenerConfig.

    Raises:
        FilterSpecError: If the ``-a`` list is malformed.
    """
    return ListenerConfig(
        group=args.group,
        port=args.port,
        interface=args.interface,
        name_filter=build_name_filter(args.events),
        attr_filter=build_attribute_constraint(args.attributes),
        verbosity=args.verbosity,
    )


def configure_logging(verbosity: int) -> None:
    """Send lwesfilter log records to stderr at a level set by ``-v``."""
    level = _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]
    package_logger = logging.getLogger("lwesfilter")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def run(
    config: ListenerConfig,
    source: EventSourcePort,
    stop: StopToken,
    stdout: TextIO,
) -> int:
    """Run the filter pipeline and map its outcome to an exit status."""
    try:
        written = run_pipeline(
            source, stdout, stop, config.name_filter, config.attr_filter
        )
    except FormattingError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    logger.info("Stopped after printing %d events", written)
    return EXIT_OK


def _silence_stdout() -> None:
    # Further writes at interpreter shutdown would raise again.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        try:
            os.dup2(devnull, sys.stdout.fileno())
        finally:
            os.close(devnull)
    except (OSError, ValueError) as exc:
        logger.debug("Cannot redirect stdout to %s: %s", os.devnull, exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``lwes-filter-listener`` script.

    Returns:
        0 after a signal-initiated stop, 1 on help, usage errors,
        malformed filters, or internal formatting errors.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help(sys.stderr)
        return EXIT_FAILURE

    configure_logging(args.verbosity)
    try:
        config = build_config(args)
    except FilterSpecError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE

    stop = StopToken()
    previous = install_stop_handlers(stop)
    try:
        try:
            source = MulticastEventSource(
                config.group,
                config.port,
                interface=config.interface,
                receive_timeout=config.receive_timeout,
            )
        except OSError as exc:
            logger.error("Cannot listen on %s:%d: %s", config.group, config.port, exc)
            return EXIT_FAILURE
        with source:
            return run(config, source, stop, sys.stdout)
    except BrokenPipeError:
        _silence_stdout()
        return EXIT_OK
    finally:
        restore_handlers(previous)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
