"""Enums for the facet domain."""

from enum import Enum


class FacetKind(str, Enum):
    """Closed set of facet value kinds.

    Each kind selects exactly one normalizer.
    """

    TEXT_LOCATION = "text-location"  # Free-text place, canonicalized
    ENUM = "enum"  # Exactly one of allowed_values
    MULTI_ENUM = "multi-enum"  # One or more of allowed_values
    ORDERED_BAND = "ordered-band"  # Quantity bucketed by ascending bounds
