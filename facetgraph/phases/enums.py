"""Enums for the phase state machine."""

from enum import Enum


class PhaseId(str, Enum):
    """Intake phases, declared in their fixed forward order."""

    CORE_FACETS = "core-facets"
    MISSION_SELECTION = "mission-selection"
    ROLE_FACETS = "role-facets"
    MISSION_OVERRIDES = "mission-overrides"
    COMPLETE = "complete"

    @property
    def rank(self) -> int:
        """Position in the fixed phase order."""
        return PHASE_ORDER.index(self)


class PhaseKind(str, Enum):
    """Completion rule family of a phase."""

    FACETS = "facets"  # Ratio of static required facets present
    MISSION_SELECTION = "mission_selection"  # Binary: mission chosen or not
    ROLE_FACETS = "role_facets"  # Ratio over mission-derived requirements
    OPTIONAL = "optional"  # Never blocking
    TERMINAL = "terminal"  # No successor


PHASE_ORDER: tuple[PhaseId, ...] = tuple(PhaseId)

PHASE_KINDS: dict[PhaseId, PhaseKind] = {
    PhaseId.CORE_FACETS: PhaseKind.FACETS,
    PhaseId.MISSION_SELECTION: PhaseKind.MISSION_SELECTION,
    PhaseId.ROLE_FACETS: PhaseKind.ROLE_FACETS,
    PhaseId.MISSION_OVERRIDES: PhaseKind.OPTIONAL,
    PhaseId.COMPLETE: PhaseKind.TERMINAL,
}

# Forward-only transition table; COMPLETE is terminal.
PHASE_TRANSITIONS: dict[PhaseId, PhaseId | None] = {
    PhaseId.CORE_FACETS: PhaseId.MISSION_SELECTION,
    PhaseId.MISSION_SELECTION: PhaseId.ROLE_FACETS,
    PhaseId.ROLE_FACETS: PhaseId.MISSION_OVERRIDES,
    PhaseId.MISSION_OVERRIDES: PhaseId.COMPLETE,
    PhaseId.COMPLETE: None,
}
