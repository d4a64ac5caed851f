"""Facet domain models.

Contains the immutable facet definitions and the candidate update shape
handed over by the value extractor.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from facetgraph.facets.enums import FacetKind

# Canonical value of an answered facet: a single token/text for enum,
# band and location kinds, an ordered tuple of tokens for multi-enum.
CanonicalValue = str | tuple[str, ...]


class FacetDefinition(BaseModel):
    """Static definition of a single facet.

    depends_on has set semantics; it is kept as a tuple so that
    traversals over it are deterministic.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique facet key")
    kind: FacetKind = Field(..., description="Value kind")
    required: bool = Field(default=False, description="Blocks phase completion")
    allowed_values: tuple[str, ...] = Field(
        default=(), description="Ordered allowed values / band labels"
    )
    band_bounds: tuple[float, ...] = Field(
        default=(), description="Ascending inclusive upper bounds (ordered-band)"
    )
    depends_on: tuple[str, ...] = Field(
        default=(), description="Facets that must be answered first"
    )
    aliases: dict[str, str] = Field(
        default_factory=dict, description="Synonym -> allowed value"
    )
    description: str = Field(default="", description="Label for prompt generation")

    def normalize(self, raw_value: Any) -> CanonicalValue:
        """Normalize a raw value for this facet.

        Raises:
            NormalizationError: If the value cannot be canonicalized
        """
        from facetgraph.facets.normalizers import NORMALIZERS

        return NORMALIZERS[self.kind](self, raw_value)


class FacetUpdate(BaseModel):
    """A candidate (facet, raw value) pair from the value extractor."""

    model_config = ConfigDict(frozen=True)

    facet_id: str = Field(..., description="Candidate facet id")
    raw_value: Any = Field(..., description="Value as extracted, not normalized")
