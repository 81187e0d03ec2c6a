"""Core domain models for decoded events and command-line filters."""

import ipaddress
from dataclasses import dataclass, field


def _check_range(value: int, bits: int, signed: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        raise ValueError(f"{value} out of range for {bits}-bit integer")


@dataclass(frozen=True)
class UInt16:
    """Unsigned 16-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 16, signed=False)


@dataclass(frozen=True)
class Int16:
    """Signed 16-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 16, signed=True)


@dataclass(frozen=True)
class UInt32:
    """Unsigned 32-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 32, signed=False)


@dataclass(frozen=True)
class Int32:
    """Signed 32-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 32, signed=True)


@dataclass(frozen=True)
class UInt64:
    """Unsigned 64-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 64, signed=False)


@dataclass(frozen=True)
class Int64:
    """Signed 64-bit integer attribute."""

    value: int

    def __post_init__(self) -> None:
        _check_range(self.value, 64, signed=True)


@dataclass(frozen=True)
class Boolean:
    """Boolean attribute."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"expected bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class IPv4Address:
    """IPv4 address attribute.

    Accepts an ``ipaddress.IPv4Address`` or anything it can parse
    (dotted string, packed bytes, int) and stores the parsed address.
    """

    value: ipaddress.IPv4Address

    def __post_init__(self) -> None:
        if not isinstance(self.value, ipaddress.IPv4Address):
            object.__setattr__(self, "value", ipaddress.IPv4Address(self.value))


@dataclass(frozen=True)
class String:
    """String attribute."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"expected str, got {type(self.value).__name__}")


AttributeValue = (
    UInt16 | Int16 | UInt32 | Int32 | UInt64 | Int64 | Boolean | IPv4Address | String
)


@dataclass(frozen=True)
class Event:
    """A decoded event.

    Attributes:
        name: Event name (non-empty).
        attributes: Attribute name to typed value. Iteration follows
            insertion order, which is the order used when rendering.
    """

    name: str
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("event name must not be empty")

    @property
    def attribute_count(self) -> int:
        return len(self.attributes)


@dataclass(frozen=True)
class EventNameFilter:
    """Whitelist of event names, matched with exact string equality.

    An absent whitelist is represented by ``None``, never by an empty one.
    """

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("event name filter must contain at least one name")

    def matches(self, name: str) -> bool:
        return name in self.names


@dataclass(frozen=True)
class AttributeConstraint:
    """Ordered (key, expected text) pairs that must all hold for an event.

    An absent constraint is represented by ``None``, never by an empty one.
    """

    pairs: tuple[tuple[str, str], ...]

    def __post_init__(self) -> None:
        if not self.pairs:
            raise ValueError("attribute constraint must contain at least one pair")
        for key, expected in self.pairs:
            if not key:
                raise ValueError("attribute constraint key must not be empty")
            if not expected:
                raise ValueError(
                    f"attribute constraint value for {key!r} must not be empty"
                )
