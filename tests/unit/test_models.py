"""Tests for core domain models."""

import dataclasses
import ipaddress

import pytest

from lwesfilter.core.models import (
    AttributeConstraint,
    Boolean,
    Event,
    EventNameFilter,
    Int16,
    Int32,
    Int64,
    IPv4Address,
    String,
    UInt16,
    UInt32,
    UInt64,
)


class TestIntegerVariants:
    """Tests for the fixed-width integer attribute variants."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("variant", "low", "high"),
        [
            (UInt16, 0, 65535),
            (Int16, -32768, 32767),
            (UInt32, 0, 4294967295),
            (Int32, -2147483648, 2147483647),
            (UInt64, 0, 18446744073709551615),
            (Int64, -9223372036854775808, 9223372036854775807),
        ],
    )
    def test_accepts_bounds_and_rejects_beyond(self, variant, low, high) -> None:
        """Each width accepts its limits and rejects one past them."""
        assert variant(low).value == low
        assert variant(high).value == high
        with pytest.raises(ValueError, match="out of range"):
            variant(low - 1)
        with pytest.raises(ValueError, match="out of range"):
            variant(high + 1)

    @pytest.mark.core
    def test_rejects_bool(self) -> None:
        """A bool is not accepted where an integer is expected."""
        with pytest.raises(TypeError):
            UInt16(True)

    @pytest.mark.core
    def test_is_immutable(self) -> None:
        """Attribute values cannot be changed after creation."""
        value = Int64(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.value = 2  # type: ignore[misc]


class TestOtherVariants:
    """Tests for Boolean, IPv4Address and String."""

    @pytest.mark.core
    def test_boolean_requires_bool(self) -> None:
        """Boolean rejects ints."""
        with pytest.raises(TypeError):
            Boolean(1)  # type: ignore[arg-type]

    @pytest.mark.core
    def test_ipv4_parses_dotted_string(self) -> None:
        """IPv4Address converts a dotted string to ipaddress.IPv4Address."""
        value = IPv4Address("192.168.1.10")
        assert value.value == ipaddress.IPv4Address("192.168.1.10")

    @pytest.mark.core
    def test_ipv4_rejects_garbage(self) -> None:
        """IPv4Address rejects text that is not an address."""
        with pytest.raises(ValueError):
            IPv4Address("not-an-ip")  # type: ignore[arg-type]

    @pytest.mark.core
    def test_string_requires_str(self) -> None:
        """String rejects bytes."""
        with pytest.raises(TypeError):
            String(b"raw")  # type: ignore[arg-type]


class TestEvent:
    """Tests for Event."""

    @pytest.mark.core
    def test_empty_name_rejected(self) -> None:
        """An event must have a name."""
        with pytest.raises(ValueError, match="must not be empty"):
            Event(name="")

    @pytest.mark.core
    def test_attribute_count(self, login_event: Event) -> None:
        """attribute_count is the number of attributes."""
        assert login_event.attribute_count == 6
        assert Event(name="Empty").attribute_count == 0

    @pytest.mark.core
    def test_preserves_insertion_order(self) -> None:
        """Attributes iterate in insertion order."""
        event = Event(
            name="Ordered",
            attributes={"z": UInt16(1), "a": UInt16(2), "m": UInt16(3)},
        )
        assert list(event.attributes) == ["z", "a", "m"]


class TestEventNameFilter:
    """Tests for EventNameFilter."""

    @pytest.mark.core
    def test_requires_at_least_one_name(self) -> None:
        """An empty whitelist is not representable."""
        with pytest.raises(ValueError):
            EventNameFilter(())

    @pytest.mark.core
    def test_matches_any_name(self) -> None:
        """Any listed name matches."""
        name_filter = EventNameFilter(("Login", "Logout"))
        assert name_filter.matches("Login")
        assert name_filter.matches("Logout")
        assert not name_filter.matches("Heartbeat")

    @pytest.mark.core
    def test_match_is_case_sensitive(self) -> None:
        """Matching is exact, including case."""
        assert not EventNameFilter(("Login",)).matches("login")


class TestAttributeConstraint:
    """Tests for AttributeConstraint."""

    @pytest.mark.core
    def test_requires_at_least_one_pair(self) -> None:
        """An empty constraint is not representable."""
        with pytest.raises(ValueError):
            AttributeConstraint(())

    @pytest.mark.core
    @pytest.mark.parametrize("pair", [("", "v"), ("k", "")])
    def test_rejects_empty_key_or_value(self, pair: tuple[str, str]) -> None:
        """Keys and expected values must be non-empty."""
        with pytest.raises(ValueError):
            AttributeConstraint((pair,))
