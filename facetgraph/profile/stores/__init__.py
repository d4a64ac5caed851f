"""Profile stores."""

from facetgraph.profile.store import ProfileStore
from facetgraph.profile.stores.inmemory import InMemoryProfileStore

__all__ = [
    "ProfileStore",
    "InMemoryProfileStore",
]
