"""Phase completion evaluator."""

from typing import TYPE_CHECKING

from facetgraph.phases.enums import PhaseKind
from facetgraph.phases.models import OPTIONAL_PHASE_RATIO, PhaseDefinition, PhaseEvaluation

if TYPE_CHECKING:
    from facetgraph.profile.models import Profile


class PhaseCompletionEvaluator:
    """Computes completion ratio and satisfaction for a phase.

    Only `satisfied` is authoritative. The ratio of an optional phase is
    pinned at 0.5 and carries no "how done" meaning.
    """

    def evaluate(self, phase: PhaseDefinition, profile: "Profile") -> PhaseEvaluation:
        """Evaluate a phase against a profile.

        Args:
            phase: Phase definition
            profile: Profile snapshot (not modified)

        Returns:
            PhaseEvaluation with ratio in [0, 1] and satisfied flag
        """
        missing: tuple[str, ...] = ()

        if phase.kind in (PhaseKind.FACETS, PhaseKind.ROLE_FACETS):
            required = self.required_facet_ids(phase, profile)
            missing = tuple(f for f in required if f not in profile.facets)
            # No requirements (not yet resolved) is vacuously complete.
            ratio = 1.0 if not required else (len(required) - len(missing)) / len(required)
        elif phase.kind == PhaseKind.MISSION_SELECTION:
            ratio = 1.0 if profile.selected_mission is not None else 0.0
        elif phase.kind == PhaseKind.OPTIONAL:
            ratio = OPTIONAL_PHASE_RATIO
        elif phase.kind == PhaseKind.TERMINAL:
            ratio = 1.0
        else:
            raise ValueError(f"Unhandled phase kind: {phase.kind}")

        return PhaseEvaluation(
            phase=phase.id,
            ratio=ratio,
            satisfied=ratio >= phase.completion_threshold,
            missing_facet_ids=missing,
        )

    @staticmethod
    def required_facet_ids(phase: PhaseDefinition, profile: "Profile") -> tuple[str, ...]:
        """Required facets for a phase, using the cached role requirements."""
        if phase.kind == PhaseKind.ROLE_FACETS:
            record = profile.phase_records.get(phase.id)
            if record is not None:
                return record.required_facet_ids
        return phase.required_facet_ids
