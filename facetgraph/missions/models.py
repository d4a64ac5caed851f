"""Mission domain models."""

from pydantic import BaseModel, ConfigDict, Field

CORE_NAMESPACE = "core"


class QuestionPlanEntry(BaseModel):
    """Priority of one facet in a mission's question plan (lower asks sooner)."""

    model_config = ConfigDict(frozen=True)

    facet_id: str = Field(..., description="Facet id")
    priority: int = Field(..., description="Total-order rank, lower first")


class Mission(BaseModel):
    """A selectable objective that determines which facets are required.

    required_facets and optional_facets map a namespace ("core" or a role
    name) to facet ids; both the namespace order and the id order are
    significant.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Mission id")
    name: str = Field(..., description="Display name")
    role_capabilities: tuple[str, ...] = Field(
        default=(), description="Role tags implied by the mission"
    )
    required_facets: dict[str, tuple[str, ...]] = Field(
        default_factory=dict, description="Blocking facets by namespace"
    )
    optional_facets: dict[str, tuple[str, ...]] = Field(
        default_factory=dict, description="Non-blocking facets by namespace"
    )
    question_plan: tuple[QuestionPlanEntry, ...] = Field(
        default=(), description="Facet ask priorities"
    )

    def priority_of(self, facet_id: str) -> float:
        """Plan priority of a facet; unplanned facets rank last."""
        for entry in self.question_plan:
            if entry.facet_id == facet_id:
                return entry.priority
        return float("inf")

    def optional_facet_ids(self) -> tuple[str, ...]:
        """Every optional facet id, namespaces in declared order, de-duplicated."""
        result: list[str] = []
        for facet_ids in self.optional_facets.values():
            for facet_id in facet_ids:
                if facet_id not in result:
                    result.append(facet_id)
        return tuple(result)


class MissionCandidate(BaseModel):
    """A mission choice extracted from user input."""

    model_config = ConfigDict(frozen=True)

    mission_id: str = Field(..., description="Candidate mission id")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0, description="Extractor confidence")
