"""Event filtering by name whitelist and attribute equality."""

from lwesfilter.core.formatting import format_value
from lwesfilter.core.models import AttributeConstraint, Event, EventNameFilter


def passes(
    event: Event,
    name_filter: EventNameFilter | None = None,
    attr_filter: AttributeConstraint | None = None,
) -> bool:
    """Decide whether an event should be printed.

    Args:
        event: The decoded event.
        name_filter: Accepted event names (OR). None accepts every name.
        attr_filter: Required attribute values (AND), compared against the
            canonical text rendering. None applies no constraint.

    Returns:
        True if the event satisfies both filters.

    Raises:
        FormattingError: If an attribute value cannot be rendered. This is
            never reported as a mismatch.
    """
    if name_filter is not None and not name_filter.matches(event.name):
        return False

    if attr_filter is not None:
        for key, expected in attr_filter.pairs:
            value = event.attributes.get(key)
            if value is None:
                return False
            if format_value(value) != expected:
                return False

    return True
