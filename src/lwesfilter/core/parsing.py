"""Parsers for the structured command-line filter lists.

Two mini-languages are supported:

- ``-e``: comma-separated event names, e.g. ``Login,Logout``
- ``-a``: comma-separated ``key=value`` pairs, e.g. ``status=ok,port=22``

Commas cannot be escaped. Only the first ``=`` of a pair separates key
from value; any further ``=`` belongs to the value.
"""

from lwesfilter.core.errors import FilterSpecError
from lwesfilter.core.models import AttributeConstraint, EventNameFilter

LIST_DELIMITER = ","
PAIR_DELIMITER = "="


def parse_name_list(text: str) -> list[str]:
    """Split a comma-separated list of names.

    Empty fields produced by leading, trailing or doubled commas are kept
    as empty strings. An empty input yields an empty list. Never raises.
    """
    if not text:
        return []
    return text.split(LIST_DELIMITER)


def parse_attribute_constraint(text: str) -> list[tuple[str, str]]:
    """Split a comma-separated list of ``key=value`` pairs.

    Args:
        text: The raw option value. An empty string yields an empty list.

    Returns:
        (key, value) pairs in input order.

    Raises:
        FilterSpecError: If any field has no ``=``, an empty key, or an
            empty value. Nothing is returned for partially valid input.
    """
    pairs: list[tuple[str, str]] = []
    for field in parse_name_list(text):
        key, sep, value = field.partition(PAIR_DELIMITER)
        if not sep or not key:
            raise FilterSpecError(
                f"Error while parsing a key from a comma-separated list of pairs: {field!r}"
            )
        if not value:
            raise FilterSpecError(
                f"Error while parsing a value from a comma-separated list of pairs: {field!r}"
            )
        pairs.append((key, value))
    return pairs


def build_name_filter(text: str) -> EventNameFilter | None:
    """Build an event name whitelist, or None when the list is empty."""
    names = parse_name_list(text)
    if not names:
        return None
    return EventNameFilter(tuple(names))


def build_attribute_constraint(text: str) -> AttributeConstraint | None:
    """Build an attribute constraint, or None when the list is empty.

    Raises:
        FilterSpecError: If the list is malformed.
    """
    pairs = parse_attribute_constraint(text)
    if not pairs:
        return None
    return AttributeConstraint(tuple(pairs))
