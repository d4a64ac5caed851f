"""facetgraph: phase-driven onboarding over a typed facet graph.

Collects structured profile attributes (facets) from a subject across
conversational turns, in a fixed sequence of phases, and hands a complete
profile to a matching collaborator.
"""

from facetgraph.engine import OnboardingEngine
from facetgraph.errors import ErrorCode, ValidationFailure
from facetgraph.exceptions import (
    CatalogError,
    DependencyCycleError,
    FacetGraphError,
    InvariantViolationError,
    MissingMissionError,
    SubjectBusyError,
)
from facetgraph.facets import FacetUpdate
from facetgraph.missions import MissionCandidate
from facetgraph.phases import PhaseId
from facetgraph.profile import Profile
from facetgraph.result import MatchRequest, TurnResult
from facetgraph.service import OnboardingService

__version__ = "0.1.0"

__all__ = [
    "CatalogError",
    "DependencyCycleError",
    "ErrorCode",
    "FacetGraphError",
    "FacetUpdate",
    "InvariantViolationError",
    "MatchRequest",
    "MissingMissionError",
    "MissionCandidate",
    "OnboardingEngine",
    "OnboardingService",
    "PhaseId",
    "Profile",
    "SubjectBusyError",
    "TurnResult",
    "ValidationFailure",
]
