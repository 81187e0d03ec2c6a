"""Canonical text rendering of attribute values.

The same text is used for display and for equality checks in attribute
filters, so every variant has exactly one rendering.
"""

from lwesfilter.core.errors import FormattingError
from lwesfilter.core.models import (
    AttributeValue,
    Boolean,
    Int16,
    Int32,
    Int64,
    IPv4Address,
    String,
    UInt16,
    UInt32,
    UInt64,
)


def format_value(value: AttributeValue) -> str:
    """Render an attribute value to its canonical text form.

    Args:
        value: Any member of the AttributeValue union.

    Returns:
        Decimal text for integers, "true"/"false" for booleans,
        dotted-decimal for IPv4 addresses, raw content for strings.

    Raises:
        FormattingError: If value is not an AttributeValue.
    """
    match value:
        case (
            UInt16(number)
            | Int16(number)
            | UInt32(number)
            | Int32(number)
            | UInt64(number)
            | Int64(number)
        ):
            return str(number)
        case Boolean(flag):
            return "true" if flag else "false"
        case IPv4Address(address):
            return str(address)
        case String(text):
            return text
        case _:
            raise FormattingError(value)
