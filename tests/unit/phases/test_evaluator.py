"""Tests for PhaseCompletionEvaluator."""

import pytest

from facetgraph.phases.enums import PhaseId, PhaseKind
from facetgraph.phases.evaluator import PhaseCompletionEvaluator
from facetgraph.phases.models import PhaseDefinition, PhaseTable
from tests.factories import ProfileFactory
from tests.factories.onboarding import CORE_ANSWERS


@pytest.fixture
def evaluator() -> PhaseCompletionEvaluator:
    return PhaseCompletionEvaluator()


@pytest.fixture
def phases() -> PhaseTable:
    return PhaseTable.from_config()


class TestFacetPhases:
    """Tests for ratio-based phases."""

    def test_threshold_boundary_with_three_required(self, evaluator, phases) -> None:
        """Two of three required facets (0.667) stay below a 0.75 threshold."""
        core = phases.get(PhaseId.CORE_FACETS)
        profile = ProfileFactory.create(facets={"location": "Lyon, France", "gender": "female"})

        evaluation = evaluator.evaluate(core, profile)

        assert evaluation.ratio == pytest.approx(2 / 3)
        assert evaluation.satisfied is False
        assert evaluation.missing_facet_ids == ("commsPref",)

    def test_all_required_satisfies(self, evaluator, phases) -> None:
        core = phases.get(PhaseId.CORE_FACETS)
        profile = ProfileFactory.create(facets=dict(CORE_ANSWERS))

        evaluation = evaluator.evaluate(core, profile)

        assert evaluation.ratio == 1.0
        assert evaluation.satisfied is True
        assert evaluation.missing_facet_ids == ()

    def test_optional_facets_do_not_count(self, evaluator, phases) -> None:
        core = phases.get(PhaseId.CORE_FACETS)
        profile = ProfileFactory.create(facets={"languages": ("english",)})

        assert evaluator.evaluate(core, profile).ratio == 0.0

    def test_empty_requirements_are_vacuously_complete(self, evaluator) -> None:
        phase = PhaseDefinition(
            id=PhaseId.CORE_FACETS,
            kind=PhaseKind.FACETS,
            completion_threshold=1.0,
            next_phase=PhaseId.MISSION_SELECTION,
        )

        evaluation = evaluator.evaluate(phase, ProfileFactory.create())

        assert evaluation.ratio == 1.0
        assert evaluation.satisfied is True

    def test_role_facets_use_resolved_requirements(self, evaluator, phases) -> None:
        role = phases.get(PhaseId.ROLE_FACETS)
        profile = ProfileFactory.tutor_in_role_facets()
        profile.facets.update({"step": "3", "budget": "$$"})

        evaluation = evaluator.evaluate(role, profile)

        assert evaluation.ratio == 0.5
        assert evaluation.satisfied is False
        assert evaluation.missing_facet_ids == ("stepsTaught", "specialties")


class TestOtherPhaseKinds:
    """Tests for binary, optional and terminal phases."""

    def test_mission_selection_binary(self, evaluator, phases) -> None:
        phase = phases.get(PhaseId.MISSION_SELECTION)
        waiting = ProfileFactory.create(current_phase=PhaseId.MISSION_SELECTION)
        chosen = ProfileFactory.create(
            current_phase=PhaseId.MISSION_SELECTION, selected_mission="tutor"
        )

        assert evaluator.evaluate(phase, waiting).ratio == 0.0
        assert evaluator.evaluate(phase, waiting).satisfied is False
        assert evaluator.evaluate(phase, chosen).ratio == 1.0
        assert evaluator.evaluate(phase, chosen).satisfied is True

    def test_optional_phase_pinned_at_half(self, evaluator, phases) -> None:
        phase = phases.get(PhaseId.MISSION_OVERRIDES)
        profile = ProfileFactory.tutor_in_role_facets()

        evaluation = evaluator.evaluate(phase, profile)

        assert evaluation.ratio == 0.5
        assert evaluation.satisfied is True

    def test_terminal_phase(self, evaluator, phases) -> None:
        evaluation = evaluator.evaluate(phases.get(PhaseId.COMPLETE), ProfileFactory.create())
        assert evaluation.ratio == 1.0
        assert evaluation.satisfied is True
