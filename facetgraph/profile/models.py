"""Profile domain models.

The Profile is the per-subject intake record. The engine never mutates a
snapshot it was given; it works on a deep copy and returns it.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from facetgraph.facets.models import CanonicalValue
from facetgraph.phases.enums import PHASE_ORDER, PhaseId


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class PhaseRecord(BaseModel):
    """Per-phase cached state.

    For role-facets this holds the requirement set resolved for the
    selected mission, so later completion checks do not depend on the
    catalog staying unchanged.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    phase: PhaseId = Field(..., description="Phase the record belongs to")
    required_facet_ids: tuple[str, ...] = Field(
        default=(), description="Resolved required facets"
    )
    resolved_for_mission: str | None = Field(
        default=None, description="Mission the requirements were derived from"
    )


class MissionOverride(BaseModel):
    """Audit entry for an explicit mission change."""

    model_config = ConfigDict(frozen=True)

    previous_mission: str = Field(..., description="Mission replaced")
    new_mission: str = Field(..., description="Mission selected instead")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Candidate confidence")
    phase: PhaseId = Field(..., description="Phase the override happened in")
    overridden_at: datetime = Field(default_factory=utc_now, description="Override time")


class Profile(BaseModel):
    """Per-subject onboarding state."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    subject_id: str = Field(..., min_length=1, description="Subject identifier")
    facets: dict[str, CanonicalValue] = Field(
        default_factory=dict, description="Answered facets, canonical values"
    )
    selected_mission: str | None = Field(default=None, description="Chosen mission id")
    mission_confidence: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Confidence of the mission choice"
    )
    current_phase: PhaseId = Field(default=PhaseId.CORE_FACETS, description="Active phase")
    phase_history: list[PhaseId] = Field(
        default_factory=list, description="Completed phases, append-only"
    )
    phase_records: dict[PhaseId, PhaseRecord] = Field(
        default_factory=dict, description="Cached per-phase state"
    )
    mission_overrides: list[MissionOverride] = Field(
        default_factory=list, description="Explicit mission changes"
    )
    processed_turn_ids: list[str] = Field(
        default_factory=list, description="Recent turn ids, for duplicate delivery"
    )
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last change")

    @model_validator(mode="after")
    def _check_phase_history(self) -> "Profile":
        """current_phase must be the first phase not in phase_history."""
        expected = list(PHASE_ORDER[: self.current_phase.rank])
        if self.phase_history != expected:
            raise ValueError(
                f"phase_history {[p.value for p in self.phase_history]} does not lead to "
                f"{self.current_phase.value}"
            )
        return self

    @property
    def answered(self) -> frozenset[str]:
        """Ids of every answered facet."""
        return frozenset(self.facets)

    def has_completed(self, phase: PhaseId) -> bool:
        """Whether a phase has already been passed."""
        return phase in self.phase_history

    def touch(self) -> None:
        """Mark the profile as changed."""
        self.updated_at = utc_now()
