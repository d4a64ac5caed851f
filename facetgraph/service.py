"""Turn service: load, process and save a subject's profile under a lock.

The engine is pure; this is the only place where profile snapshots are
read from and written back to a store.
"""

from collections.abc import Iterable

from facetgraph.engine import OnboardingEngine
from facetgraph.exceptions import SubjectBusyError
from facetgraph.facets.models import FacetUpdate
from facetgraph.missions.models import MissionCandidate
from facetgraph.mutex import SubjectMutex
from facetgraph.observability.logging import get_logger
from facetgraph.observability.metrics import (
    FACET_REJECTIONS,
    MISSION_OVERRIDES,
    PHASE_TRANSITIONS,
    TURN_LATENCY,
    TURNS_PROCESSED,
)
from facetgraph.profile.models import Profile
from facetgraph.profile.store import ProfileStore
from facetgraph.result import TurnResult

logger = get_logger(__name__)


class OnboardingService:
    """Serializes turns per subject around an OnboardingEngine."""

    def __init__(
        self,
        engine: OnboardingEngine,
        store: ProfileStore,
        mutex: SubjectMutex | None = None,
    ) -> None:
        self._engine = engine
        self._store = store
        self._mutex = mutex or SubjectMutex()

    @property
    def engine(self) -> OnboardingEngine:
        return self._engine

    @property
    def mutex(self) -> SubjectMutex:
        return self._mutex

    async def get_profile(self, subject_id: str) -> Profile:
        """Latest snapshot for a subject, or a fresh one on first contact."""
        profile = await self._store.get(subject_id)
        if profile is None:
            profile = self._engine.new_profile(subject_id)
            logger.info("profile_created", subject_id=subject_id)
        return profile

    async def handle_turn(
        self,
        subject_id: str,
        updates: Iterable[FacetUpdate] = (),
        mission_candidate: MissionCandidate | None = None,
        turn_id: str | None = None,
    ) -> TurnResult:
        """Process one intake turn for a subject.

        Args:
            subject_id: Subject identifier
            updates: Candidate facet updates
            mission_candidate: Candidate mission choice, if any
            turn_id: Transport delivery id for duplicate detection

        Returns:
            TurnResult from the engine; the new snapshot is already saved

        Raises:
            SubjectBusyError: If the subject lock could not be acquired
        """
        with TURN_LATENCY.time():
            result = await self._handle_turn(subject_id, list(updates), mission_candidate, turn_id)

        record_turn(result)
        logger.debug(
            "turn_handled",
            subject_id=subject_id,
            phase=result.phase.value,
            next_facet=result.next_facet,
            failure_count=len(result.failures),
            duplicate=result.duplicate,
        )
        return result

    async def _handle_turn(
        self,
        subject_id: str,
        updates: list[FacetUpdate],
        mission_candidate: MissionCandidate | None,
        turn_id: str | None,
    ) -> TurnResult:
        async with self._mutex.acquire(subject_id) as acquired:
            if not acquired:
                raise SubjectBusyError(
                    f"Subject {subject_id} is busy with another turn", subject_id=subject_id
                )

            profile = await self.get_profile(subject_id)
            result = self._engine.process_turn(
                profile,
                updates=updates,
                mission_candidate=mission_candidate,
                turn_id=turn_id,
            )
            if not result.duplicate:
                await self._store.save(result.profile)
            return result

    async def override_mission(
        self, subject_id: str, candidate: MissionCandidate
    ) -> TurnResult:
        """Explicitly change a subject's mission.

        Raises:
            SubjectBusyError: If the subject lock could not be acquired
        """
        async with self._mutex.acquire(subject_id) as acquired:
            if not acquired:
                raise SubjectBusyError(
                    f"Subject {subject_id} is busy with another turn", subject_id=subject_id
                )

            profile = await self.get_profile(subject_id)
            result = self._engine.override_mission(profile, candidate)
            if not result.failures:
                await self._store.save(result.profile)

        record_turn(result)
        if not result.failures:
            MISSION_OVERRIDES.labels(new_mission=candidate.mission_id).inc()
        return result

    async def reset(self, subject_id: str) -> bool:
        """Discard a subject's profile so intake starts over."""
        async with self._mutex.acquire(subject_id) as acquired:
            if not acquired:
                raise SubjectBusyError(
                    f"Subject {subject_id} is busy with another turn", subject_id=subject_id
                )
            deleted = await self._store.delete(subject_id)
        logger.info("profile_reset", subject_id=subject_id, deleted=deleted)
        return deleted


def record_turn(result: TurnResult) -> None:
    """Record Prometheus metrics for a turn result."""
    outcome = "duplicate" if result.duplicate else "applied"
    TURNS_PROCESSED.labels(phase=result.phase.value, outcome=outcome).inc()
    for failure in result.failures:
        FACET_REJECTIONS.labels(code=failure.code.value).inc()
    if result.transition is not None:
        PHASE_TRANSITIONS.labels(
            from_phase=result.transition.from_phase.value,
            to_phase=result.transition.to_phase.value,
        ).inc()
