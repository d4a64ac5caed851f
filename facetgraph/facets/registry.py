"""Facet registry: static, validated catalog of facet definitions.

The registry is built once at process start. Construction fails fast on
malformed definitions and on dependency cycles, so a running engine can
rely on every lookup and traversal terminating.
"""

from collections.abc import Iterable, Iterator

from facetgraph.exceptions import CatalogError, DependencyCycleError
from facetgraph.facets.enums import FacetKind
from facetgraph.facets.models import FacetDefinition
from facetgraph.facets.normalizers import normalize_token
from facetgraph.observability.logging import get_logger

logger = get_logger(__name__)


class FacetRegistry:
    """Immutable lookup table of facet definitions in declaration order."""

    def __init__(self, definitions: Iterable[FacetDefinition]) -> None:
        """Build and validate the registry.

        Raises:
            CatalogError: On duplicate ids, unknown dependencies or
                inconsistent allowed values / band bounds
            DependencyCycleError: If any facet depends on itself,
                directly or transitively
        """
        self._definitions: dict[str, FacetDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise CatalogError(f"Duplicate facet id: {definition.id}")
            self._definitions[definition.id] = definition

        self._index = {facet_id: i for i, facet_id in enumerate(self._definitions)}

        for definition in self._definitions.values():
            self._check_definition(definition)
        self._resolution_order = self._resolve_dependency_order()

        logger.debug("facet_registry_loaded", facet_count=len(self._definitions))

    def get(self, facet_id: str) -> FacetDefinition | None:
        """Get a definition by id."""
        return self._definitions.get(facet_id)

    def __contains__(self, facet_id: object) -> bool:
        return facet_id in self._definitions

    def __iter__(self) -> Iterator[FacetDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def ids(self) -> tuple[str, ...]:
        """Facet ids in declaration order."""
        return tuple(self._definitions)

    @property
    def resolution_order(self) -> tuple[str, ...]:
        """Facet ids ordered so every facet follows its dependencies."""
        return self._resolution_order

    def declaration_index(self, facet_id: str) -> int:
        """Position of a facet in declaration order (final tie-break)."""
        return self._index[facet_id]

    def dependencies(self, facet_id: str) -> tuple[str, ...]:
        """Direct dependencies of a registered facet."""
        return self._definitions[facet_id].depends_on

    def _check_definition(self, definition: FacetDefinition) -> None:
        for dependency in definition.depends_on:
            if dependency not in self._definitions:
                raise CatalogError(
                    f"Facet {definition.id} depends on unknown facet {dependency}"
                )

        if definition.kind in (FacetKind.ENUM, FacetKind.MULTI_ENUM, FacetKind.ORDERED_BAND):
            if not definition.allowed_values:
                raise CatalogError(f"Facet {definition.id} declares no allowed values")

        if definition.kind == FacetKind.ORDERED_BAND:
            bounds = definition.band_bounds
            if len(definition.allowed_values) != len(bounds) + 1:
                raise CatalogError(
                    f"Facet {definition.id} needs one band label per bound plus a catch-all"
                )
            if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
                raise CatalogError(f"Facet {definition.id} band bounds must be ascending")

        allowed = {normalize_token(value) for value in definition.allowed_values}
        for alias, target in definition.aliases.items():
            if normalize_token(target) not in allowed:
                raise CatalogError(
                    f"Facet {definition.id} alias {alias!r} targets unknown value {target!r}"
                )

    def _resolve_dependency_order(self) -> tuple[str, ...]:
        """Order facets by repeatedly releasing those whose dependencies are met.

        Anything left over when no facet can be released sits on a cycle.
        """
        resolved: list[str] = []
        done: set[str] = set()
        pending = list(self._definitions)

        while pending:
            ready = [
                facet_id
                for facet_id in pending
                if set(self._definitions[facet_id].depends_on) <= done
            ]
            if not ready:
                logger.error("facet_dependency_cycle", facet_ids=pending)
                raise DependencyCycleError(
                    f"Facet dependency cycle among: {', '.join(pending)}",
                    facet_ids=pending,
                )
            resolved.extend(ready)
            done.update(ready)
            pending = [facet_id for facet_id in pending if facet_id not in done]

        return tuple(resolved)
