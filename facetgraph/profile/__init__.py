"""Subject profiles: facet answers, mission choice and phase progress."""

from facetgraph.profile.models import MissionOverride, PhaseRecord, Profile
from facetgraph.profile.store import ProfileStore
from facetgraph.profile.stores import InMemoryProfileStore

__all__ = [
    "InMemoryProfileStore",
    "MissionOverride",
    "PhaseRecord",
    "Profile",
    "ProfileStore",
]
