"""Default mission catalog."""

from facetgraph.facets.registry import FacetRegistry
from facetgraph.missions.catalog import MissionCatalog
from facetgraph.missions.models import CORE_NAMESPACE, Mission, QuestionPlanEntry

CORE_FACETS = ("location", "gender", "commsPref")


def _plan(*facet_ids: str) -> tuple[QuestionPlanEntry, ...]:
    return tuple(
        QuestionPlanEntry(facet_id=facet_id, priority=rank)
        for rank, facet_id in enumerate(facet_ids, start=1)
    )


DEFAULT_MISSIONS: tuple[Mission, ...] = (
    Mission(
        id="tutor",
        name="Become a tutor",
        role_capabilities=("mentor",),
        required_facets={
            CORE_NAMESPACE: CORE_FACETS,
            "member": ("step", "budget"),
            "mentor": ("stepsTaught", "specialties"),
        },
        optional_facets={
            "member": ("availability", "languages"),
            "mentor": ("sessionLength",),
        },
        question_plan=_plan(
            "step", "budget", "specialties", "stepsTaught", "availability", "sessionLength",
        ),
    ),
    Mission(
        id="student",
        name="Find a tutor",
        role_capabilities=("learner",),
        required_facets={
            CORE_NAMESPACE: CORE_FACETS,
            "member": ("step", "budget"),
            "learner": ("learningGoals",),
        },
        optional_facets={
            "learner": ("genderPreference", "availability", "sessionLength"),
        },
        question_plan=_plan(
            "learningGoals", "step", "budget", "genderPreference", "availability", "sessionLength",
        ),
    ),
    Mission(
        id="peer",
        name="Find a study partner",
        role_capabilities=("peer",),
        required_facets={
            CORE_NAMESPACE: CORE_FACETS,
            "member": ("step",),
            "peer": ("learningGoals",),
        },
        optional_facets={
            "member": ("availability", "languages"),
        },
        question_plan=_plan("step", "learningGoals", "availability", "languages"),
    ),
)


def default_mission_catalog(registry: FacetRegistry) -> MissionCatalog:
    """Build the catalog for the default missions."""
    return MissionCatalog(DEFAULT_MISSIONS, registry)
