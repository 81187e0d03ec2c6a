"""lwesfilter - print LWES events that match name and attribute filters."""

from lwesfilter.core.errors import (
    DecodeError,
    EncodeError,
    FilterSpecError,
    FormattingError,
    LwesFilterError,
)
from lwesfilter.core.filters import passes
from lwesfilter.core.formatting import format_value
from lwesfilter.core.models import (
    AttributeConstraint,
    AttributeValue,
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
from lwesfilter.core.parsing import (
    build_attribute_constraint,
    build_name_filter,
    parse_attribute_constraint,
    parse_name_list,
)
from lwesfilter.core.pipeline import StopToken, run_pipeline
from lwesfilter.core.rendering import render

__all__ = [
    "AttributeConstraint",
    "AttributeValue",
    "Boolean",
    "DecodeError",
    "EncodeError",
    "Event",
    "EventNameFilter",
    "FilterSpecError",
    "FormattingError",
    "IPv4Address",
    "Int16",
    "Int32",
    "Int64",
    "LwesFilterError",
    "StopToken",
    "String",
    "UInt16",
    "UInt32",
    "UInt64",
    "build_attribute_constraint",
    "build_name_filter",
    "format_value",
    "parse_attribute_constraint",
    "parse_name_list",
    "passes",
    "render",
    "run_pipeline",
]
