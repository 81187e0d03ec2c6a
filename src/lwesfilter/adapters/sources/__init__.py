"""Event source adapters implementing EventSourcePort."""

from lwesfilter.adapters.sources.in_memory import InMemoryEventSource
from lwesfilter.adapters.sources.multicast import MulticastEventSource

__all__ = [
    "InMemoryEventSource",
    "MulticastEventSource",
]
