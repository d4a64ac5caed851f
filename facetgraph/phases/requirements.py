"""Mission-aware requirement resolution for the role-facets phase."""

from facetgraph.exceptions import InvariantViolationError, MissingMissionError
from facetgraph.missions.catalog import MissionCatalog
from facetgraph.missions.models import Mission
from facetgraph.observability.logging import get_logger
from facetgraph.phases.enums import PhaseId
from facetgraph.profile.models import PhaseRecord, Profile

logger = get_logger(__name__)


class RequirementResolver:
    """Derives role-facet requirements from the selected mission.

    The relevant namespaces are the implicit acting role plus every role
    capability of the mission; requirements are collected in the order the
    mission declares its namespaces.
    """

    def __init__(self, acting_role: str = "member") -> None:
        self._acting_role = acting_role

    def role_namespaces(self, mission: Mission) -> tuple[str, ...]:
        """Namespaces relevant to a mission, in mission-declared order."""
        relevant = {self._acting_role, *mission.role_capabilities}
        return tuple(ns for ns in mission.required_facets if ns in relevant)

    def resolve(self, mission: Mission) -> tuple[str, ...]:
        """Ordered, de-duplicated role requirements of a mission."""
        result: list[str] = []
        for namespace in self.role_namespaces(mission):
            for facet_id in mission.required_facets[namespace]:
                if facet_id not in result:
                    result.append(facet_id)
        return tuple(result)

    def apply(self, profile: Profile, missions: MissionCatalog) -> PhaseRecord:
        """Resolve and cache role requirements on the profile.

        Resolution happens once per mission selection; an existing record
        for the same mission is returned untouched.

        Raises:
            MissingMissionError: If no mission is selected
            InvariantViolationError: If the selected mission is not in the catalog
        """
        if profile.selected_mission is None:
            logger.error(
                "role_facets_without_mission",
                subject_id=profile.subject_id,
                current_phase=profile.current_phase.value,
            )
            raise MissingMissionError(
                "role-facets entered without a selected mission",
                subject_id=profile.subject_id,
            )

        existing = profile.phase_records.get(PhaseId.ROLE_FACETS)
        if existing is not None and existing.resolved_for_mission == profile.selected_mission:
            return existing

        mission = missions.get(profile.selected_mission)
        if mission is None:
            logger.error(
                "selected_mission_not_in_catalog",
                subject_id=profile.subject_id,
                mission_id=profile.selected_mission,
            )
            raise InvariantViolationError(
                f"Selected mission {profile.selected_mission} is not in the catalog"
            )

        record = PhaseRecord(
            phase=PhaseId.ROLE_FACETS,
            required_facet_ids=self.resolve(mission),
            resolved_for_mission=mission.id,
        )
        profile.phase_records[PhaseId.ROLE_FACETS] = record

        logger.info(
            "role_requirements_resolved",
            subject_id=profile.subject_id,
            mission_id=mission.id,
            required_facet_ids=list(record.required_facet_ids),
        )
        return record
