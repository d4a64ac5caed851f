"""Phases: the forward-only intake state machine.

Services (evaluator, requirement resolver, transition controller) live in
their own modules and are imported from there.
"""

from facetgraph.phases.enums import (
    PHASE_KINDS,
    PHASE_ORDER,
    PHASE_TRANSITIONS,
    PhaseId,
    PhaseKind,
)
from facetgraph.phases.models import (
    MISSION_ANSWER_KEY,
    OPTIONAL_PHASE_RATIO,
    PhaseDefinition,
    PhaseEvaluation,
    PhaseTable,
    PhaseTransition,
)

__all__ = [
    "MISSION_ANSWER_KEY",
    "OPTIONAL_PHASE_RATIO",
    "PHASE_KINDS",
    "PHASE_ORDER",
    "PHASE_TRANSITIONS",
    "PhaseDefinition",
    "PhaseEvaluation",
    "PhaseId",
    "PhaseKind",
    "PhaseTable",
    "PhaseTransition",
]
