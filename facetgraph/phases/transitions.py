"""Phase transition controller: the forward-only state machine driver."""

from facetgraph.exceptions import InvariantViolationError
from facetgraph.missions.catalog import MissionCatalog
from facetgraph.observability.logging import get_logger
from facetgraph.phases.enums import PhaseId
from facetgraph.phases.models import PhaseEvaluation, PhaseTable, PhaseTransition
from facetgraph.phases.requirements import RequirementResolver
from facetgraph.profile.models import Profile

logger = get_logger(__name__)


class PhaseTransitionController:
    """Moves a profile at most one phase forward per call."""

    def __init__(
        self,
        phases: PhaseTable,
        missions: MissionCatalog,
        resolver: RequirementResolver,
    ) -> None:
        self._phases = phases
        self._missions = missions
        self._resolver = resolver

    def advance(self, profile: Profile, evaluation: PhaseEvaluation) -> PhaseTransition | None:
        """Advance the profile if its current phase is satisfied.

        Mutates the given profile; callers pass a working copy.

        Args:
            profile: Working copy of the profile
            evaluation: Evaluation of profile.current_phase

        Returns:
            The transition taken, or None if the phase is not satisfied or
            already terminal

        Raises:
            InvariantViolationError: If the evaluation is for another phase
            MissingMissionError: If role-facets would be entered without a mission
        """
        current = profile.current_phase
        if evaluation.phase != current:
            raise InvariantViolationError(
                f"Evaluation is for {evaluation.phase.value}, profile is in {current.value}"
            )
        if not evaluation.satisfied:
            return None

        target = self._phases.next_phase(current)
        if target is None:
            return None

        if target == PhaseId.ROLE_FACETS:
            self._resolver.apply(profile, self._missions)

        profile.phase_history.append(current)
        profile.current_phase = target
        profile.touch()

        logger.info(
            "phase_transitioned",
            subject_id=profile.subject_id,
            from_phase=current.value,
            to_phase=target.value,
            ratio=evaluation.ratio,
        )
        if target == PhaseId.COMPLETE:
            logger.info(
                "onboarding_complete",
                subject_id=profile.subject_id,
                mission_id=profile.selected_mission,
            )

        return PhaseTransition(from_phase=current, to_phase=target)
