"""Onboarding engine: one intake turn over an explicit profile snapshot.

The engine performs no I/O. Each call deep-copies the snapshot it is given,
applies validated updates, evaluates the current phase, takes at most one
phase transition and plans the next facet to request.
"""

from collections.abc import Iterable

from facetgraph.config.models.engine import EngineConfig
from facetgraph.errors import ErrorCode, ValidationFailure
from facetgraph.exceptions import CatalogError
from facetgraph.facets.models import FacetUpdate
from facetgraph.facets.registry import FacetRegistry
from facetgraph.facets.validation import FacetValidator
from facetgraph.missions.catalog import MissionCatalog
from facetgraph.missions.models import Mission, MissionCandidate
from facetgraph.observability.logging import get_logger
from facetgraph.phases.enums import PhaseId
from facetgraph.phases.evaluator import PhaseCompletionEvaluator
from facetgraph.phases.models import PhaseEvaluation, PhaseTable, PhaseTransition
from facetgraph.phases.requirements import RequirementResolver
from facetgraph.phases.transitions import PhaseTransitionController
from facetgraph.planning.planner import NextQuestionPlanner
from facetgraph.profile.models import MissionOverride, Profile
from facetgraph.result import MatchRequest, TurnResult

logger = get_logger(__name__)

# Turn ids remembered per profile for duplicate-delivery detection
MAX_REMEMBERED_TURNS = 32


class OnboardingEngine:
    """Stateless intake engine.

    Wires the validator, evaluator, requirement resolver, transition
    controller and planner over static catalogs.
    """

    def __init__(
        self,
        registry: FacetRegistry,
        missions: MissionCatalog,
        phases: PhaseTable | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Facet registry
            missions: Mission catalog (validated against the registry)
            phases: Phase table (default: built from config)
            config: Engine configuration

        Raises:
            CatalogError: If a phase names a facet the registry lacks
        """
        self._config = config or EngineConfig()
        self._registry = registry
        self._missions = missions
        self._phases = phases or PhaseTable.from_config(self._config)

        unknown = sorted(f for f in self._phases.facet_ids() if f not in registry)
        if unknown:
            raise CatalogError(f"Phases reference unknown facets: {', '.join(unknown)}")

        self._validator = FacetValidator(registry)
        self._evaluator = PhaseCompletionEvaluator()
        self._resolver = RequirementResolver(acting_role=self._config.acting_role)
        self._controller = PhaseTransitionController(self._phases, missions, self._resolver)
        self._planner = NextQuestionPlanner(registry)

    @property
    def registry(self) -> FacetRegistry:
        return self._registry

    @property
    def missions(self) -> MissionCatalog:
        return self._missions

    @property
    def phases(self) -> PhaseTable:
        return self._phases

    @property
    def validator(self) -> FacetValidator:
        return self._validator

    def new_profile(self, subject_id: str) -> Profile:
        """Create the empty profile for a first-contact subject."""
        return Profile(subject_id=subject_id)

    def evaluate(self, profile: Profile) -> PhaseEvaluation:
        """Evaluate the profile's current phase."""
        return self._evaluator.evaluate(self._phases.get(profile.current_phase), profile)

    def next_facet(self, profile: Profile) -> str | None:
        """Plan the next facet for the profile's current phase."""
        return self._planner.next_facet(
            self._phases.get(profile.current_phase),
            self._selected_mission(profile),
            profile,
        )

    def apply_updates(
        self, profile: Profile, updates: Iterable[FacetUpdate]
    ) -> tuple[Profile, list[ValidationFailure]]:
        """Apply candidate facet updates without evaluating phases.

        Replaying an update that sets a facet to the value it already holds
        returns a profile equal to the input.

        Returns:
            (new profile snapshot, failures for rejected candidates)
        """
        working = profile.model_copy(deep=True)
        failures = self._apply_updates(working, updates)
        return working, failures

    def select_mission(
        self, profile: Profile, candidate: MissionCandidate
    ) -> tuple[Profile, list[ValidationFailure]]:
        """Record a mission choice without evaluating phases.

        A mission is only recorded during mission-selection. Earlier
        candidates get MISSION_NOT_EXPECTED; later ones are a no-op when they
        repeat the selected mission and MISSION_ALREADY_SELECTED otherwise.

        Returns:
            (new profile snapshot, failures for a rejected candidate)
        """
        working = profile.model_copy(deep=True)
        failure = self._select_mission(working, candidate)
        return working, [failure] if failure else []

    def process_turn(
        self,
        profile: Profile,
        updates: Iterable[FacetUpdate] = (),
        mission_candidate: MissionCandidate | None = None,
        turn_id: str | None = None,
    ) -> TurnResult:
        """Process one intake turn.

        A turn that carries updates or a mission candidate but changes
        nothing (a replay) takes no transition. An empty turn may still
        advance a phase that is already satisfied.

        Args:
            profile: Latest profile snapshot (not modified)
            updates: Candidate facet updates from the value extractor
            mission_candidate: Candidate mission choice, if any
            turn_id: Transport delivery id; a repeated id is not re-applied

        Returns:
            TurnResult with the new snapshot and the next facet to request
        """
        if turn_id is not None and turn_id in profile.processed_turn_ids:
            logger.info("duplicate_turn_ignored", subject_id=profile.subject_id, turn_id=turn_id)
            return self.describe(profile).model_copy(update={"duplicate": True})

        updates = list(updates)
        working = profile.model_copy(deep=True)
        failures = self._apply_updates(working, updates)
        if mission_candidate is not None:
            failure = self._select_mission(working, mission_candidate)
            if failure is not None:
                failures.append(failure)

        transition = None
        if working != profile or not (updates or mission_candidate):
            transition = self._controller.advance(working, self.evaluate(working))
        self._remember_turn(working, turn_id)
        return self._build_result(working, failures, transition)

    def override_mission(self, profile: Profile, candidate: MissionCandidate) -> TurnResult:
        """Explicitly replace the selected mission.

        Allowed only while collecting role facets. Collected facets are kept
        (facets are not phase-scoped) and role requirements are re-derived
        from the new mission. The phase never moves backwards.

        Returns:
            TurnResult; OVERRIDE_NOT_ALLOWED, UNKNOWN_MISSION or
            LOW_CONFIDENCE failures leave the profile unchanged
        """
        working = profile.model_copy(deep=True)
        failure = self._check_candidate(candidate)
        if failure is None and working.current_phase != PhaseId.ROLE_FACETS:
            failure = ValidationFailure(
                code=ErrorCode.OVERRIDE_NOT_ALLOWED,
                message=(
                    "Mission can only be overridden during role-facets, "
                    f"profile is in {working.current_phase.value}"
                ),
                mission_id=candidate.mission_id,
            )
        if failure is not None:
            return self._build_result(working, [failure], None)

        previous = working.selected_mission
        if previous != candidate.mission_id:
            working.mission_overrides.append(
                MissionOverride(
                    previous_mission=previous or "",
                    new_mission=candidate.mission_id,
                    confidence=candidate.confidence,
                    phase=working.current_phase,
                )
            )
            working.selected_mission = candidate.mission_id
            working.mission_confidence = candidate.confidence
            self._resolver.apply(working, self._missions)
            working.touch()
            logger.info(
                "mission_overridden",
                subject_id=working.subject_id,
                previous_mission=previous,
                mission_id=candidate.mission_id,
            )

        evaluation = self.evaluate(working)
        transition = self._controller.advance(working, evaluation)
        return self._build_result(working, [], transition)

    def describe(self, profile: Profile) -> TurnResult:
        """Current phase, evaluation and next facet, without any change."""
        return self._build_result(profile.model_copy(deep=True), [], None)

    def _apply_updates(
        self, working: Profile, updates: Iterable[FacetUpdate]
    ) -> list[ValidationFailure]:
        accepted, failures = self._validator.validate_many(updates)
        changed = [f for f, value in accepted.items() if working.facets.get(f) != value]
        if changed:
            for facet_id in changed:
                working.facets[facet_id] = accepted[facet_id]
            working.touch()
            logger.info(
                "facets_updated",
                subject_id=working.subject_id,
                facet_ids=changed,
                current_phase=working.current_phase.value,
            )
        return failures

    def _check_candidate(self, candidate: MissionCandidate) -> ValidationFailure | None:
        if candidate.mission_id not in self._missions:
            return ValidationFailure(
                code=ErrorCode.UNKNOWN_MISSION,
                message=f"Unknown mission: {candidate.mission_id}",
                mission_id=candidate.mission_id,
            )
        if candidate.confidence < self._config.mission_confidence_threshold:
            return ValidationFailure(
                code=ErrorCode.LOW_CONFIDENCE,
                message=(
                    f"Mission confidence {candidate.confidence:.2f} is below "
                    f"{self._config.mission_confidence_threshold:.2f}"
                ),
                mission_id=candidate.mission_id,
            )
        return None

    def _select_mission(
        self, working: Profile, candidate: MissionCandidate
    ) -> ValidationFailure | None:
        failure = self._check_candidate(candidate)
        if failure is not None:
            logger.info(
                "mission_rejected",
                subject_id=working.subject_id,
                mission_id=candidate.mission_id,
                code=failure.code.value,
            )
            return failure

        if working.selected_mission == candidate.mission_id:
            return None
        if working.selected_mission is not None:
            return ValidationFailure(
                code=ErrorCode.MISSION_ALREADY_SELECTED,
                message=(
                    f"Mission {working.selected_mission} is already selected; "
                    "use a mission override to change it"
                ),
                mission_id=candidate.mission_id,
            )
        if working.current_phase != PhaseId.MISSION_SELECTION:
            return ValidationFailure(
                code=ErrorCode.MISSION_NOT_EXPECTED,
                message=(
                    "Missions are chosen once core facets are collected, "
                    f"profile is in {working.current_phase.value}"
                ),
                mission_id=candidate.mission_id,
            )

        working.selected_mission = candidate.mission_id
        working.mission_confidence = candidate.confidence
        working.touch()
        logger.info(
            "mission_selected",
            subject_id=working.subject_id,
            mission_id=candidate.mission_id,
            confidence=candidate.confidence,
        )
        return None

    def _selected_mission(self, profile: Profile) -> Mission | None:
        if profile.selected_mission is None:
            return None
        return self._missions.get(profile.selected_mission)

    @staticmethod
    def _remember_turn(working: Profile, turn_id: str | None) -> None:
        if turn_id is None:
            return
        working.processed_turn_ids.append(turn_id)
        del working.processed_turn_ids[:-MAX_REMEMBERED_TURNS]

    def _build_result(
        self,
        working: Profile,
        failures: list[ValidationFailure],
        transition: PhaseTransition | None,
    ) -> TurnResult:
        phase = working.current_phase
        mission = self._selected_mission(working)
        ready = phase == PhaseId.COMPLETE

        match_request = None
        if ready and mission is not None:
            match_request = MatchRequest(
                subject_id=working.subject_id,
                selected_mission=mission.id,
                facets=dict(working.facets),
                role_capabilities=mission.role_capabilities,
            )

        return TurnResult(
            profile=working,
            phase=phase,
            evaluation=self.evaluate(working),
            transition=transition,
            next_facet=self.next_facet(working),
            awaiting_mission=phase == PhaseId.MISSION_SELECTION
            and working.selected_mission is None,
            failures=failures,
            ready=ready,
            match_request=match_request,
        )
