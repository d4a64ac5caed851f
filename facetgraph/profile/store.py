"""ProfileStore abstract interface."""

from abc import ABC, abstractmethod

from facetgraph.profile.models import Profile


class ProfileStore(ABC):
    """Abstract interface for durable profile snapshots.

    The engine never talks to a store; the turn service loads a snapshot,
    hands it to the engine, and saves the snapshot it gets back.
    """

    @abstractmethod
    async def get(self, subject_id: str) -> Profile | None:
        """Get the latest snapshot for a subject."""
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> str:
        """Save a snapshot, replacing any previous one. Returns the subject id."""
        pass

    @abstractmethod
    async def delete(self, subject_id: str) -> bool:
        """Delete a subject's snapshot."""
        pass
