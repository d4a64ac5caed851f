"""Mission catalog: static, validated lookup of missions."""

from collections.abc import Iterable, Iterator

from facetgraph.exceptions import CatalogError
from facetgraph.facets.registry import FacetRegistry
from facetgraph.missions.models import Mission
from facetgraph.observability.logging import get_logger

logger = get_logger(__name__)


class MissionCatalog:
    """Immutable lookup table of missions, checked against a facet registry."""

    def __init__(self, missions: Iterable[Mission], registry: FacetRegistry) -> None:
        """Build and validate the catalog.

        Raises:
            CatalogError: On duplicate mission ids, references to unknown
                facets, or a question plan that is not a total order
        """
        self._missions: dict[str, Mission] = {}
        for mission in missions:
            if mission.id in self._missions:
                raise CatalogError(f"Duplicate mission id: {mission.id}")
            self._check_mission(mission, registry)
            self._missions[mission.id] = mission

        logger.debug("mission_catalog_loaded", mission_count=len(self._missions))

    def get(self, mission_id: str) -> Mission | None:
        """Get a mission by id."""
        return self._missions.get(mission_id)

    def __contains__(self, mission_id: object) -> bool:
        return mission_id in self._missions

    def __iter__(self) -> Iterator[Mission]:
        return iter(self._missions.values())

    def __len__(self) -> int:
        return len(self._missions)

    @property
    def ids(self) -> tuple[str, ...]:
        """Mission ids in declaration order."""
        return tuple(self._missions)

    @staticmethod
    def _check_mission(mission: Mission, registry: FacetRegistry) -> None:
        referenced: list[str] = []
        for group in (mission.required_facets, mission.optional_facets):
            for facet_ids in group.values():
                referenced.extend(facet_ids)
        referenced.extend(entry.facet_id for entry in mission.question_plan)

        for facet_id in referenced:
            if facet_id not in registry:
                raise CatalogError(f"Mission {mission.id} references unknown facet {facet_id}")

        planned = [entry.facet_id for entry in mission.question_plan]
        if len(set(planned)) != len(planned):
            raise CatalogError(f"Mission {mission.id} plans a facet more than once")
        priorities = [entry.priority for entry in mission.question_plan]
        if len(set(priorities)) != len(priorities):
            raise CatalogError(f"Mission {mission.id} question plan priorities must be distinct")
