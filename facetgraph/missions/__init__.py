"""Missions: selectable objectives and their facet requirements."""

from facetgraph.missions.catalog import MissionCatalog
from facetgraph.missions.defaults import DEFAULT_MISSIONS, default_mission_catalog
from facetgraph.missions.models import (
    CORE_NAMESPACE,
    Mission,
    MissionCandidate,
    QuestionPlanEntry,
)

__all__ = [
    "CORE_NAMESPACE",
    "DEFAULT_MISSIONS",
    "Mission",
    "MissionCandidate",
    "MissionCatalog",
    "QuestionPlanEntry",
    "default_mission_catalog",
]
