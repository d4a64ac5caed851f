"""Facets: definitions, registry and validation of profile attributes."""

from facetgraph.facets.defaults import DEFAULT_FACETS, default_facet_registry
from facetgraph.facets.enums import FacetKind
from facetgraph.facets.models import CanonicalValue, FacetDefinition, FacetUpdate
from facetgraph.facets.normalizers import NormalizationError
from facetgraph.facets.registry import FacetRegistry
from facetgraph.facets.validation import FacetValidator

__all__ = [
    "DEFAULT_FACETS",
    "CanonicalValue",
    "FacetDefinition",
    "FacetKind",
    "FacetRegistry",
    "FacetUpdate",
    "FacetValidator",
    "NormalizationError",
    "default_facet_registry",
]
