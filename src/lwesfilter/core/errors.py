"""Exception types raised by the lwesfilter core."""


class LwesFilterError(Exception):
    """Base class for all lwesfilter errors."""


class FilterSpecError(LwesFilterError, ValueError):
    """A command-line filter list could not be parsed.

    Always fatal: a filter that is accepted half-parsed silently prints
    the wrong events.
    """


class FormattingError(LwesFilterError):
    """An attribute value could not be rendered to text.

    Only reachable when something outside the attribute union ends up in
    an event, so it is treated as an internal error.
    """

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Internal error while formatting a field of type {type(value).__name__}"
        )
        self.value = value


class DecodeError(LwesFilterError, ValueError):
    """A datagram is not a well-formed LWES event."""


class EncodeError(LwesFilterError, ValueError):
    """An event cannot be represented in the LWES wire format."""
