"""Facet validation service.

Normalizes raw candidate values against the registry. Rejections are
returned as ValidationFailure values so callers can re-prompt; nothing
here raises for bad user input.
"""

from collections.abc import Iterable
from typing import Any

from facetgraph.errors import ErrorCode, ValidationFailure
from facetgraph.facets.models import CanonicalValue, FacetUpdate
from facetgraph.facets.normalizers import NormalizationError
from facetgraph.facets.registry import FacetRegistry
from facetgraph.observability.logging import get_logger

logger = get_logger(__name__)


class FacetValidator:
    """Pure validator over a FacetRegistry."""

    def __init__(self, registry: FacetRegistry) -> None:
        self._registry = registry

    def validate(self, facet_id: str, raw_value: Any) -> CanonicalValue | ValidationFailure:
        """Normalize and validate one candidate value.

        Args:
            facet_id: Candidate facet id
            raw_value: Value as extracted from user input

        Returns:
            The canonical value, or a ValidationFailure with
            UNKNOWN_FACET or INVALID_VALUE
        """
        definition = self._registry.get(facet_id)
        if definition is None:
            return ValidationFailure(
                code=ErrorCode.UNKNOWN_FACET,
                message=f"Unknown facet: {facet_id}",
                facet_id=facet_id,
                raw_value=raw_value,
            )

        try:
            return definition.normalize(raw_value)
        except NormalizationError as e:
            return ValidationFailure(
                code=ErrorCode.INVALID_VALUE,
                message=str(e),
                facet_id=facet_id,
                raw_value=raw_value,
            )

    def validate_many(
        self, updates: Iterable[FacetUpdate]
    ) -> tuple[dict[str, CanonicalValue], list[ValidationFailure]]:
        """Validate a batch of candidate updates.

        Later updates for the same facet replace earlier ones.

        Returns:
            (accepted canonical values by facet id, failures in input order)
        """
        accepted: dict[str, CanonicalValue] = {}
        failures: list[ValidationFailure] = []

        for update in updates:
            result = self.validate(update.facet_id, update.raw_value)
            if isinstance(result, ValidationFailure):
                logger.info(
                    "facet_rejected",
                    facet_id=update.facet_id,
                    code=result.code.value,
                    raw_value=update.raw_value,
                )
                failures.append(result)
            else:
                accepted[update.facet_id] = result

        return accepted, failures
