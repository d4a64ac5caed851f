"""In-memory implementation of ProfileStore."""

from facetgraph.profile.models import Profile
from facetgraph.profile.store import ProfileStore


class InMemoryProfileStore(ProfileStore):
    """In-memory implementation of ProfileStore for testing and development.

    Snapshots are deep-copied on the way in and out so callers can never
    alias stored state.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._profiles: dict[str, Profile] = {}

    async def get(self, subject_id: str) -> Profile | None:
        """Get the latest snapshot for a subject."""
        profile = self._profiles.get(subject_id)
        return profile.model_copy(deep=True) if profile is not None else None

    async def save(self, profile: Profile) -> str:
        """Save a snapshot."""
        self._profiles[profile.subject_id] = profile.model_copy(deep=True)
        return profile.subject_id

    async def delete(self, subject_id: str) -> bool:
        """Delete a subject's snapshot."""
        return self._profiles.pop(subject_id, None) is not None
