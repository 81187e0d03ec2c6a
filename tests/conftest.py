"""Shared test fixtures for all test modules."""

import logging

import pytest

from lwesfilter.core.models import (
    Boolean,
    Event,
    Int32,
    IPv4Address,
    String,
    UInt16,
)
from lwesfilter.core.pipeline import StopToken


@pytest.fixture
def stop_token() -> StopToken:
    """Provide a fresh, unset stop token."""
    return StopToken()


@pytest.fixture
def login_event() -> Event:
    """A Login event with one attribute of each common kind."""
    return Event(
        name="Login",
        attributes={
            "user": String("alice"),
            "status": String("ok"),
            "port": UInt16(22),
            "delta": Int32(-5),
            "admin": Boolean(False),
            "src": IPv4Address("10.0.0.1"),
        },
    )


@pytest.fixture
def heartbeat_event() -> Event:
    """An event whose name is never whitelisted in tests."""
    return Event(name="Heartbeat", attributes={"status": String("ok")})


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by configure_logging() between tests."""
    yield
    package_logger = logging.getLogger("lwesfilter")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
