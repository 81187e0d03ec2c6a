"""LWES binary wire codec.

Layout (all integers big-endian)::

    event        := name:short_string count:u16 attribute*
    attribute    := key:short_string type:u8 value
    short_string := u8 length, UTF-8 bytes
    long_string  := u16 length, UTF-8 bytes

IPv4 addresses travel as four octets in reverse order.
"""

import ipaddress
import struct

from lwesfilter.core.errors import DecodeError, EncodeError
from lwesfilter.core.models import (
    AttributeValue,
    Boolean,
    Event,
    Int16,
    Int32,
    Int64,
    IPv4Address,
    String,
    UInt16,
    UInt32,
    UInt64,
)

U_INT_16_TOKEN = 0x01
INT_16_TOKEN = 0x02
U_INT_32_TOKEN = 0x03
INT_32_TOKEN = 0x04
STRING_TOKEN = 0x05
IP_ADDR_TOKEN = 0x06
INT_64_TOKEN = 0x07
U_INT_64_TOKEN = 0x08
BOOLEAN_TOKEN = 0x09

MAX_EVENT_NAME_SIZE = 127
MAX_ATTRIBUTE_NAME_SIZE = 255
MAX_STRING_SIZE = 0xFFFF

# type token -> (struct format, variant) for fixed-width integers
_INTEGER_CODECS: dict[int, tuple[struct.Struct, type]] = {
    U_INT_16_TOKEN: (struct.Struct(">H"), UInt16),
    INT_16_TOKEN: (struct.Struct(">h"), Int16),
    U_INT_32_TOKEN: (struct.Struct(">I"), UInt32),
    INT_32_TOKEN: (struct.Struct(">i"), Int32),
    INT_64_TOKEN: (struct.Struct(">q"), Int64),
    U_INT_64_TOKEN: (struct.Struct(">Q"), UInt64),
}

_VARIANT_TOKENS: dict[type, int] = {
    variant: token for token, (_, variant) in _INTEGER_CODECS.items()
}
_VARIANT_TOKENS.update(
    {String: STRING_TOKEN, IPv4Address: IP_ADDR_TOKEN, Boolean: BOOLEAN_TOKEN}
)

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")


class _Reader:
    """Cursor over a datagram that raises DecodeError on truncation."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def take(self, size: int) -> bytes:
        if size > self.remaining:
            raise DecodeError(
                f"truncated event: need {size} bytes at offset {self._offset}, "
                f"have {self.remaining}"
            )
        chunk = bytes(self._data[self._offset : self._offset + size])
        self._offset += size
        return chunk

    def unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self.take(fmt.size))[0]

    def text(self, length_fmt: struct.Struct) -> str:
        raw = self.take(self.unpack(length_fmt))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 in event: {exc}") from exc


def _decode_value(reader: _Reader, token: int) -> AttributeValue:
    if token in _INTEGER_CODECS:
        fmt, variant = _INTEGER_CODECS[token]
        return variant(reader.unpack(fmt))
    if token == STRING_TOKEN:
        return String(reader.text(_U16))
    if token == IP_ADDR_TOKEN:
        return IPv4Address(ipaddress.IPv4Address(reader.take(4)[::-1]))
    if token == BOOLEAN_TOKEN:
        return Boolean(reader.unpack(_U8) != 0)
    raise DecodeError(f"unknown attribute type token 0x{token:02x}")


def decode_event(data: bytes) -> Event:
    """Decode one LWES datagram.

    Args:
        data: The raw datagram payload.

    Returns:
        Event whose attributes keep their wire order.

    Raises:
        DecodeError: On truncated data, an unknown type token, invalid
            UTF-8, an empty event name, or trailing bytes.
    """
    reader = _Reader(data)
    name = reader.text(_U8)
    if not name:
        raise DecodeError("event name is empty")
    count = reader.unpack(_U16)
    attributes: dict[str, AttributeValue] = {}
    for _ in range(count):
        key = reader.text(_U8)
        token = reader.unpack(_U8)
        attributes[key] = _decode_value(reader, token)
    if reader.remaining:
        raise DecodeError(f"{reader.remaining} trailing bytes after event {name!r}")
    return Event(name=name, attributes=attributes)


def _encode_text(text: str, length_fmt: struct.Struct, limit: int, what: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > limit:
        raise EncodeError(f"{what} is {len(raw)} bytes, limit is {limit}")
    return length_fmt.pack(len(raw)) + raw


def _encode_value(value: AttributeValue) -> bytes:
    match value:
        case String(text):
            return _encode_text(text, _U16, MAX_STRING_SIZE, "string value")
        case IPv4Address(address):
            return address.packed[::-1]
        case Boolean(flag):
            return _U8.pack(1 if flag else 0)
        case _:
            fmt, _variant = _INTEGER_CODECS[_VARIANT_TOKENS[type(value)]]
            return fmt.pack(value.value)


def encode_event(event: Event) -> bytes:
    """Encode an event to the LWES wire format.

    Args:
        event: The event to serialize.

    Returns:
        The datagram payload.

    Raises:
        EncodeError: If a name or string exceeds its length prefix, or an
            attribute is not an AttributeValue.
    """
    parts = [
        _encode_text(event.name, _U8, MAX_EVENT_NAME_SIZE, "event name"),
        _U16.pack(event.attribute_count),
    ]
    for key, value in event.attributes.items():
        token = _VARIANT_TOKENS.get(type(value))
        if token is None:
            raise EncodeError(f"cannot encode {type(value).__name__} for {key!r}")
        parts.append(_encode_text(key, _U8, MAX_ATTRIBUTE_NAME_SIZE, "attribute name"))
        parts.append(_U8.pack(token))
        parts.append(_encode_value(value))
    return b"".join(parts)
