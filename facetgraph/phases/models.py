"""Phase definitions and the validated phase table."""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from facetgraph.config.models.engine import EngineConfig
from facetgraph.exceptions import CatalogError
from facetgraph.phases.enums import (
    PHASE_KINDS,
    PHASE_ORDER,
    PHASE_TRANSITIONS,
    PhaseId,
    PhaseKind,
)

MISSION_ANSWER_KEY = "mission"

# Fixed completion ratio reported for optional phases: advanceable, not "done".
OPTIONAL_PHASE_RATIO = 0.5


class PhaseDefinition(BaseModel):
    """Static completion rule for one phase."""

    model_config = ConfigDict(frozen=True)

    id: PhaseId = Field(..., description="Phase id")
    kind: PhaseKind = Field(..., description="Completion rule family")
    required_facet_ids: tuple[str, ...] = Field(
        default=(), description="Blocking facets (facet phases)"
    )
    optional_facet_ids: tuple[str, ...] = Field(
        default=(), description="Non-blocking facets asked after required ones"
    )
    required_answer_keys: tuple[str, ...] = Field(
        default=(), description="Non-facet answers (mission-selection)"
    )
    completion_threshold: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Min ratio to be satisfied"
    )
    next_phase: PhaseId | None = Field(default=None, description="Successor")


class PhaseEvaluation(BaseModel):
    """Completion result for a phase against a profile."""

    model_config = ConfigDict(frozen=True)

    phase: PhaseId
    ratio: float = Field(..., ge=0.0, le=1.0)
    satisfied: bool
    missing_facet_ids: tuple[str, ...] = ()


class PhaseTransition(BaseModel):
    """A single forward move of the phase state machine."""

    model_config = ConfigDict(frozen=True)

    from_phase: PhaseId
    to_phase: PhaseId


class PhaseTable:
    """The five phase definitions, checked against the fixed transition table."""

    def __init__(self, definitions: Iterable[PhaseDefinition]) -> None:
        """Build the table.

        Raises:
            CatalogError: If phases are missing, out of order, of the wrong
                kind, or point at a successor other than the fixed one
        """
        self._definitions: dict[PhaseId, PhaseDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise CatalogError(f"Duplicate phase: {definition.id.value}")
            self._definitions[definition.id] = definition

        if tuple(self._definitions) != PHASE_ORDER:
            raise CatalogError(
                "Phases must be declared exactly in order: "
                + " -> ".join(p.value for p in PHASE_ORDER)
            )
        for phase_id, definition in self._definitions.items():
            if definition.kind != PHASE_KINDS[phase_id]:
                raise CatalogError(
                    f"Phase {phase_id.value} must be of kind {PHASE_KINDS[phase_id].value}"
                )
            if definition.next_phase != PHASE_TRANSITIONS[phase_id]:
                raise CatalogError(f"Phase {phase_id.value} has a non-forward successor")
            if (
                definition.kind == PhaseKind.OPTIONAL
                and definition.completion_threshold > OPTIONAL_PHASE_RATIO
            ):
                raise CatalogError(f"Optional phase {phase_id.value} must never block")

    def get(self, phase_id: PhaseId) -> PhaseDefinition:
        """Definition of a phase."""
        return self._definitions[phase_id]

    def next_phase(self, phase_id: PhaseId) -> PhaseId | None:
        """Successor of a phase, None for the terminal phase."""
        return self._definitions[phase_id].next_phase

    def __iter__(self) -> Iterator[PhaseDefinition]:
        return iter(self._definitions.values())

    def facet_ids(self) -> set[str]:
        """Every facet id named statically by any phase."""
        result: set[str] = set()
        for definition in self._definitions.values():
            result.update(definition.required_facet_ids)
            result.update(definition.optional_facet_ids)
        return result

    @classmethod
    def from_config(cls, config: EngineConfig | None = None) -> "PhaseTable":
        """Build the standard table from engine configuration."""
        config = config or EngineConfig()
        thresholds = config.thresholds
        return cls(
            [
                PhaseDefinition(
                    id=PhaseId.CORE_FACETS,
                    kind=PhaseKind.FACETS,
                    required_facet_ids=tuple(config.core_facets.required),
                    optional_facet_ids=tuple(config.core_facets.optional),
                    completion_threshold=thresholds.core_facets,
                    next_phase=PhaseId.MISSION_SELECTION,
                ),
                PhaseDefinition(
                    id=PhaseId.MISSION_SELECTION,
                    kind=PhaseKind.MISSION_SELECTION,
                    required_answer_keys=(MISSION_ANSWER_KEY,),
                    completion_threshold=thresholds.mission_selection,
                    next_phase=PhaseId.ROLE_FACETS,
                ),
                PhaseDefinition(
                    id=PhaseId.ROLE_FACETS,
                    kind=PhaseKind.ROLE_FACETS,
                    completion_threshold=thresholds.role_facets,
                    next_phase=PhaseId.MISSION_OVERRIDES,
                ),
                PhaseDefinition(
                    id=PhaseId.MISSION_OVERRIDES,
                    kind=PhaseKind.OPTIONAL,
                    completion_threshold=thresholds.mission_overrides,
                    next_phase=PhaseId.COMPLETE,
                ),
                PhaseDefinition(
                    id=PhaseId.COMPLETE,
                    kind=PhaseKind.TERMINAL,
                    completion_threshold=0.0,
                    next_phase=None,
                ),
            ]
        )
