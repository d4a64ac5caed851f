"""End-to-end onboarding flows over the default catalogs."""

import itertools

import pytest

from facetgraph.engine import OnboardingEngine
from facetgraph.errors import ErrorCode
from facetgraph.facets.models import FacetUpdate
from facetgraph.missions.models import MissionCandidate
from facetgraph.phases.enums import PhaseId
from facetgraph.profile.models import Profile
from facetgraph.result import TurnResult

pytestmark = pytest.mark.integration

# Canned answers a value extractor might hand over, keyed by facet
ANSWERS: dict[str, object] = {
    "location": "Seattle, Washington",
    "gender": "Female",
    "commsPref": "video and text",
    "languages": "english, spanish",
    "step": "step 4",
    "budget": "$50-100",
    "stepsTaught": "1, 2 and 3",
    "specialties": "maths and programming",
    "learningGoals": "science",
    "availability": "weekends",
    "sessionLength": "45 minutes",
    "genderPreference": "any",
}


def answer_next(engine: OnboardingEngine, result: TurnResult, mission: str) -> TurnResult:
    """Answer whatever the engine asked for, or pick the mission when asked."""
    if result.awaiting_mission:
        return engine.process_turn(
            result.profile, mission_candidate=MissionCandidate(mission_id=mission, confidence=0.9)
        )
    updates = []
    if result.next_facet is not None:
        facet_id = result.next_facet
        updates.append(FacetUpdate(facet_id=facet_id, raw_value=ANSWERS[facet_id]))
    return engine.process_turn(result.profile, updates)


def run_to_completion(engine: OnboardingEngine, mission: str) -> list[TurnResult]:
    results = [engine.describe(engine.new_profile("subject-1"))]
    for _ in range(40):
        if results[-1].ready:
            break
        results.append(answer_next(engine, results[-1], mission))
    return results


class TestCoreScenario:
    """Core facets collected one turn at a time."""

    def test_core_answers_reach_mission_selection(self, engine: OnboardingEngine) -> None:
        profile = engine.new_profile("subject-1")

        result = engine.process_turn(
            profile, [FacetUpdate(facet_id="location", raw_value="Seattle, Washington")]
        )
        assert result.profile.facets["location"] == "Seattle, Washington, USA"
        assert result.phase == PhaseId.CORE_FACETS

        result = engine.process_turn(
            result.profile, [FacetUpdate(facet_id="gender", raw_value="Female")]
        )
        assert result.profile.facets["gender"] == "female"
        assert result.phase == PhaseId.CORE_FACETS
        assert result.evaluation.satisfied is False

        result = engine.process_turn(
            result.profile, [FacetUpdate(facet_id="commsPref", raw_value="video and text")]
        )
        assert set(result.profile.facets["commsPref"]) == {"video", "text"}
        assert result.transition.from_phase == PhaseId.CORE_FACETS
        assert result.phase == PhaseId.MISSION_SELECTION


class TestMissionScenario:
    """Mission selection and role requirement resolution."""

    def test_tutor_selection_enters_role_facets(self, engine: OnboardingEngine) -> None:
        core = engine.process_turn(
            engine.new_profile("subject-1"),
            [
                FacetUpdate(facet_id="location", raw_value="Seattle, Washington"),
                FacetUpdate(facet_id="gender", raw_value="Female"),
                FacetUpdate(facet_id="commsPref", raw_value="video and text"),
            ],
        )
        assert core.phase == PhaseId.MISSION_SELECTION

        selection_eval = engine.evaluate(
            core.profile.model_copy(update={"selected_mission": "tutor"})
        )
        assert selection_eval.ratio == 1.0

        result = engine.process_turn(
            core.profile, mission_candidate=MissionCandidate(mission_id="tutor", confidence=0.9)
        )

        assert result.profile.selected_mission == "tutor"
        assert result.transition.to_phase == PhaseId.ROLE_FACETS
        record = result.profile.phase_records[PhaseId.ROLE_FACETS]
        assert record.required_facet_ids == ("step", "budget", "stepsTaught", "specialties")


class TestBudgetScenario:
    """Budget normalization from free-form amounts."""

    @pytest.mark.parametrize(
        ("raw", "band"),
        [(30, "$"), (31, "$$"), ("$50-100", "$$"), ("around $75", "$$$"), ("$150", "$$$$")],
    )
    def test_budget_bands(self, engine: OnboardingEngine, raw, band) -> None:
        profile, failures = engine.apply_updates(
            engine.new_profile("subject-1"), [FacetUpdate(facet_id="budget", raw_value=raw)]
        )

        assert failures == []
        assert profile.facets["budget"] == band


class TestInvalidInputScenario:
    """Rejected values leave the profile untouched."""

    def test_martian_gender_rejected(self, engine: OnboardingEngine) -> None:
        profile = engine.new_profile("subject-1")

        result = engine.process_turn(profile, [FacetUpdate(facet_id="gender", raw_value="martian")])

        assert result.profile == profile
        assert result.failures[0].code == ErrorCode.INVALID_VALUE
        assert result.failures[0].facet_id == "gender"


class TestFullFlows:
    """Whole intake conversations driven by the planner."""

    @pytest.mark.parametrize("mission", ["tutor", "student", "peer"])
    def test_flow_reaches_complete(self, engine: OnboardingEngine, mission: str) -> None:
        results = run_to_completion(engine, mission)
        final = results[-1]

        assert final.ready is True
        assert final.match_request.selected_mission == mission
        assert final.profile.phase_history == [
            PhaseId.CORE_FACETS,
            PhaseId.MISSION_SELECTION,
            PhaseId.ROLE_FACETS,
            PhaseId.MISSION_OVERRIDES,
        ]

    @pytest.mark.parametrize("mission", ["tutor", "student", "peer"])
    def test_phase_never_decreases(self, engine: OnboardingEngine, mission: str) -> None:
        ranks = [r.phase.rank for r in run_to_completion(engine, mission)]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize("mission", ["tutor", "student", "peer"])
    def test_asked_facets_have_answered_dependencies(
        self, engine: OnboardingEngine, mission: str
    ) -> None:
        for result in run_to_completion(engine, mission):
            if result.next_facet is not None:
                dependencies = set(engine.registry.dependencies(result.next_facet))
                assert dependencies <= result.profile.answered

    def test_tutor_question_order(self, engine: OnboardingEngine) -> None:
        asked = [r.next_facet for r in run_to_completion(engine, "tutor") if r.next_facet]
        assert asked == [
            "location",
            "gender",
            "commsPref",
            "step",
            "budget",
            "specialties",
            "stepsTaught",
            "availability",
        ]

    def test_next_facet_is_deterministic(self, engine: OnboardingEngine) -> None:
        for result in run_to_completion(engine, "student"):
            assert engine.next_facet(result.profile) == result.next_facet
            assert engine.next_facet(result.profile) == engine.next_facet(result.profile)


class TestIdempotence:
    """Replaying a validated update is a no-op."""

    @pytest.mark.parametrize("facet_id", ["location", "gender", "commsPref", "budget"])
    def test_replay_at_every_phase(self, engine: OnboardingEngine, facet_id: str) -> None:
        update = [FacetUpdate(facet_id=facet_id, raw_value=ANSWERS[facet_id])]
        for result in run_to_completion(engine, "tutor"):
            once = engine.process_turn(result.profile, update)
            twice = engine.process_turn(once.profile, update)
            assert twice.transition is None
            assert twice.profile == once.profile

    def test_replay_does_not_touch_history(self, engine: OnboardingEngine) -> None:
        update = [FacetUpdate(facet_id="gender", raw_value="female")]
        profile = engine.process_turn(engine.new_profile("subject-1"), update).profile

        replayed = engine.apply_updates(profile, update)[0]

        assert replayed.phase_history == profile.phase_history
        assert replayed.updated_at == profile.updated_at


class TestArbitraryUpdateOrders:
    """Monotonicity under shuffled answer orders."""

    @pytest.mark.parametrize(
        "order",
        list(itertools.permutations(["budget", "location", "step", "gender", "commsPref"]))[:12],
    )
    def test_monotonic_under_any_order(self, engine: OnboardingEngine, order) -> None:
        """The mission is offered on every turn; it only sticks in mission-selection."""
        profile: Profile = engine.new_profile("subject-1")
        last_rank = profile.current_phase.rank
        for facet_id in (*order, None):
            updates = []
            if facet_id is not None:
                updates.append(FacetUpdate(facet_id=facet_id, raw_value=ANSWERS[facet_id]))
            result = engine.process_turn(
                profile, updates, MissionCandidate(mission_id="student", confidence=0.9)
            )
            assert result.phase.rank >= last_rank
            if result.profile.selected_mission is None:
                assert result.phase.rank <= PhaseId.MISSION_SELECTION.rank
            last_rank = result.phase.rank
            profile = result.profile

        assert profile.selected_mission == "student"
        assert profile.current_phase == PhaseId.ROLE_FACETS
