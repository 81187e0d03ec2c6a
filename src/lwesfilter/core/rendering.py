"""Text rendering of whole events.

Output shape, one line per event::

    <name>[<count>] {<k1> = <v1>;<k2> = <v2>;}
"""

from lwesfilter.core.formatting import format_value
from lwesfilter.core.models import Event


def render(event: Event) -> str:
    """Render an event as a single newline-terminated line.

    Attributes appear in insertion order, each followed by ``;``.
    Keys are written verbatim; values use their canonical text form.
    """
    body = "".join(
        f"{key} = {format_value(value)};" for key, value in event.attributes.items()
    )
    return f"{event.name}[{event.attribute_count}] {{{body}}}\n"
