"""Turn result models returned by the onboarding engine."""

from pydantic import BaseModel, Field

from facetgraph.errors import ValidationFailure
from facetgraph.facets.models import CanonicalValue
from facetgraph.phases.enums import PhaseId
from facetgraph.phases.models import PhaseEvaluation, PhaseTransition
from facetgraph.profile.models import Profile


class MatchRequest(BaseModel):
    """Hand-off to the matching collaborator once intake is complete."""

    subject_id: str
    selected_mission: str
    facets: dict[str, CanonicalValue]
    role_capabilities: tuple[str, ...]


class TurnResult(BaseModel):
    """Complete result of processing one intake turn.

    The profile is a new snapshot; the input snapshot is never modified.
    """

    profile: Profile = Field(..., description="Updated profile snapshot")
    phase: PhaseId = Field(..., description="Phase after the turn")
    evaluation: PhaseEvaluation = Field(..., description="Evaluation of `phase`")
    transition: PhaseTransition | None = Field(
        default=None, description="Transition taken this turn"
    )
    next_facet: str | None = Field(default=None, description="Facet to request next")
    awaiting_mission: bool = Field(
        default=False, description="The prompt should ask for a mission"
    )
    failures: list[ValidationFailure] = Field(
        default_factory=list, description="Rejected candidates, in input order"
    )
    ready: bool = Field(default=False, description="Intake complete")
    match_request: MatchRequest | None = Field(
        default=None, description="Payload for the matching collaborator"
    )
    duplicate: bool = Field(
        default=False, description="Turn id was already processed; nothing applied"
    )
