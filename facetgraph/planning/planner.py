"""Next-question planner.

Chooses which facet to request next within the current phase. The planner
is a pure function of (phase, mission, profile): calling it twice on the
same snapshot yields the same facet, which keeps retried turns from the
chat transport harmless.
"""

from typing import TYPE_CHECKING

from facetgraph.facets.registry import FacetRegistry
from facetgraph.missions.models import Mission
from facetgraph.phases.enums import PhaseId, PhaseKind
from facetgraph.phases.models import PhaseDefinition

if TYPE_CHECKING:
    from facetgraph.profile.models import Profile


class NextQuestionPlanner:
    """Dependency- and priority-aware facet selection."""

    def __init__(self, registry: FacetRegistry) -> None:
        self._registry = registry

    def candidates(
        self,
        phase: PhaseDefinition,
        mission: Mission | None,
        profile: "Profile",
    ) -> tuple[str, ...]:
        """Unanswered facets of the phase, required ones first."""
        if phase.kind in (PhaseKind.MISSION_SELECTION, PhaseKind.TERMINAL):
            return ()

        required = self._required(phase, profile)
        optional = list(phase.optional_facet_ids)
        if phase.kind == PhaseKind.OPTIONAL and mission is not None:
            optional.extend(mission.optional_facet_ids())

        result: list[str] = []
        for facet_id in (*required, *optional):
            if facet_id not in profile.facets and facet_id not in result:
                result.append(facet_id)
        return tuple(result)

    def next_facet(
        self,
        phase: PhaseDefinition,
        mission: Mission | None,
        profile: "Profile",
    ) -> str | None:
        """Select the next facet to ask for.

        Args:
            phase: Definition of the current phase
            mission: Selected mission, if any (source of priorities)
            profile: Profile snapshot (not modified)

        Returns:
            A facet id whose dependencies are all answered, or None when
            the phase has nothing left to ask
        """
        candidates = self.candidates(phase, mission, profile)
        if not candidates:
            return None

        answered = profile.answered
        required = set(self._required(phase, profile))
        pool = list(candidates)
        seen = set(pool)

        # Grow the pool with unanswered prerequisites until something is ready.
        # Terminates: the registry rejects cycles and the pool only grows.
        while True:
            ready = [f for f in pool if set(self._registry.dependencies(f)) <= answered]
            if ready:
                return min(ready, key=lambda f: self._rank(f, mission, required))

            added: list[str] = []
            for facet_id in pool:
                for dependency in self._registry.dependencies(facet_id):
                    if dependency not in answered and dependency not in seen:
                        added.append(dependency)
                        seen.add(dependency)
            if not added:
                return None
            pool.extend(added)

    def blocked_facets(
        self,
        phase: PhaseDefinition,
        mission: Mission | None,
        profile: "Profile",
    ) -> tuple[str, ...]:
        """Candidates whose dependencies are not all answered yet."""
        answered = profile.answered
        return tuple(
            f
            for f in self.candidates(phase, mission, profile)
            if not set(self._registry.dependencies(f)) <= answered
        )

    @staticmethod
    def _required(phase: PhaseDefinition, profile: "Profile") -> tuple[str, ...]:
        if phase.kind == PhaseKind.ROLE_FACETS:
            record = profile.phase_records.get(PhaseId.ROLE_FACETS)
            if record is not None:
                return record.required_facet_ids
        return phase.required_facet_ids

    def _rank(
        self, facet_id: str, mission: Mission | None, required: set[str]
    ) -> tuple[int, float, int]:
        priority = mission.priority_of(facet_id) if mission is not None else float("inf")
        return (
            0 if facet_id in required else 1,
            priority,
            self._registry.declaration_index(facet_id),
        )
