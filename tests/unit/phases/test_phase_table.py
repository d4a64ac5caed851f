"""Tests for phase enums and the validated PhaseTable."""

import pytest

from facetgraph.config.models import EngineConfig, PhaseThresholdsConfig
from facetgraph.exceptions import CatalogError
from facetgraph.phases.enums import PHASE_ORDER, PHASE_TRANSITIONS, PhaseId, PhaseKind
from facetgraph.phases.models import PhaseTable


class TestPhaseEnums:
    """Tests for the fixed phase order."""

    def test_rank_follows_order(self) -> None:
        assert [p.rank for p in PHASE_ORDER] == [0, 1, 2, 3, 4]
        assert PhaseId.CORE_FACETS.rank < PhaseId.COMPLETE.rank

    def test_transitions_only_move_forward(self) -> None:
        for phase, successor in PHASE_TRANSITIONS.items():
            if successor is not None:
                assert successor.rank == phase.rank + 1
        assert PHASE_TRANSITIONS[PhaseId.COMPLETE] is None


class TestFromConfig:
    """Tests for building the standard table."""

    def test_default_table(self) -> None:
        table = PhaseTable.from_config()

        assert [d.id for d in table] == list(PHASE_ORDER)
        core = table.get(PhaseId.CORE_FACETS)
        assert core.required_facet_ids == ("location", "gender", "commsPref")
        assert core.optional_facet_ids == ("languages",)
        assert core.completion_threshold == 0.75
        assert table.next_phase(PhaseId.ROLE_FACETS) == PhaseId.MISSION_OVERRIDES
        assert table.next_phase(PhaseId.COMPLETE) is None

    def test_facet_ids(self) -> None:
        assert PhaseTable.from_config().facet_ids() == {
            "location",
            "gender",
            "commsPref",
            "languages",
        }

    def test_thresholds_from_config(self) -> None:
        config = EngineConfig(thresholds=PhaseThresholdsConfig(core_facets=0.5))
        table = PhaseTable.from_config(config)
        assert table.get(PhaseId.CORE_FACETS).completion_threshold == 0.5

    def test_blocking_optional_phase_rejected(self) -> None:
        config = EngineConfig(thresholds=PhaseThresholdsConfig(mission_overrides=0.9))
        with pytest.raises(CatalogError, match="never block"):
            PhaseTable.from_config(config)


class TestTableValidation:
    """Tests for malformed phase tables."""

    def test_missing_phase(self) -> None:
        definitions = [d for d in PhaseTable.from_config() if d.id != PhaseId.MISSION_OVERRIDES]
        with pytest.raises(CatalogError, match="in order"):
            PhaseTable(definitions)

    def test_out_of_order(self) -> None:
        definitions = list(PhaseTable.from_config())
        definitions[0], definitions[1] = definitions[1], definitions[0]
        with pytest.raises(CatalogError):
            PhaseTable(definitions)

    def test_wrong_kind(self) -> None:
        definitions = list(PhaseTable.from_config())
        definitions[0] = definitions[0].model_copy(update={"kind": PhaseKind.OPTIONAL})
        with pytest.raises(CatalogError, match="kind"):
            PhaseTable(definitions)

    def test_backward_successor(self) -> None:
        definitions = list(PhaseTable.from_config())
        definitions[2] = definitions[2].model_copy(update={"next_phase": PhaseId.CORE_FACETS})
        with pytest.raises(CatalogError, match="non-forward"):
            PhaseTable(definitions)
