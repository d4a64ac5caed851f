"""Normalizers, one per facet kind.

Each normalizer is a pure function (definition, raw value) -> canonical
value that raises NormalizationError when the value cannot be accepted.
"""

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from facetgraph.facets.enums import FacetKind

if TYPE_CHECKING:
    from facetgraph.facets.models import CanonicalValue, FacetDefinition


class NormalizationError(ValueError):
    """Raised when a raw value cannot be normalized."""


TOKEN_SEPARATOR = re.compile(r"\s*(?:,|;|/|&|\+|\band\b|\bor\b)\s*", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")

US_STATES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "DC": "District of Columbia", "FL": "Florida", "GA": "Georgia",
    "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana",
    "IA": "Iowa", "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana",
    "ME": "Maine", "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan",
    "MN": "Minnesota", "MS": "Mississippi", "MO": "Missouri", "MT": "Montana",
    "NE": "Nebraska", "NV": "Nevada", "NH": "New Hampshire",
    "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania",
    "RI": "Rhode Island", "SC": "South Carolina", "SD": "South Dakota",
    "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont",
    "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming",
}
# Postal codes that are also ISO 3166 country codes ("Berlin, DE")
COUNTRY_CODE_COLLISIONS: frozenset[str] = frozenset({
    "AL", "AR", "AZ", "CA", "CO", "DE", "GA", "ID", "IL", "IN", "KY", "LA", "MA",
    "MD", "ME", "MN", "MO", "MS", "MT", "NC", "NE", "PA", "SC", "SD", "TN", "VA",
})
US_STATE_NAMES: dict[str, str] = {name.lower(): name for name in US_STATES.values()}
US_COUNTRY_SPELLINGS: frozenset[str] = frozenset({
    "usa", "us", "u.s.", "u.s.a.", "united states", "united states of america",
})


def normalize_token(raw: str) -> str:
    """Lowercase, trim and join inner whitespace/underscores with '-'."""
    return re.sub(r"[\s_]+", "-", raw.strip().lower())


def _resolve_token(definition: "FacetDefinition", raw: str) -> str:
    """Map one token to its declared allowed value."""
    token = normalize_token(raw)
    aliases = {normalize_token(k): v for k, v in definition.aliases.items()}
    token = normalize_token(aliases.get(token, token))
    for allowed in definition.allowed_values:
        if normalize_token(allowed) == token:
            return allowed
    raise NormalizationError(
        f"{raw!r} is not one of {list(definition.allowed_values)} for {definition.id}"
    )


def _as_text(definition: "FacetDefinition", raw_value: Any) -> str:
    if isinstance(raw_value, bool):
        raise NormalizationError(f"Boolean is not a valid value for {definition.id}")
    if isinstance(raw_value, (int, float)):
        return str(raw_value)
    if not isinstance(raw_value, str):
        raise NormalizationError(
            f"Expected text for {definition.id}, got {type(raw_value).__name__}"
        )
    return raw_value


def normalize_enum(definition: "FacetDefinition", raw_value: Any) -> str:
    """Normalize a single-choice value."""
    text = _as_text(definition, raw_value)
    if not text.strip():
        raise NormalizationError(f"Empty value for {definition.id}")
    return _resolve_token(definition, text)


def normalize_multi_enum(
    definition: "FacetDefinition", raw_value: Any
) -> tuple[str, ...]:
    """Normalize a multi-choice value.

    Accepts a list of tokens or text joined by commas, slashes or "and".
    Every token must be valid; duplicates collapse keeping first-seen order.
    """
    if isinstance(raw_value, (list, tuple)):
        tokens = [_as_text(definition, item) for item in raw_value]
    else:
        tokens = TOKEN_SEPARATOR.split(_as_text(definition, raw_value))

    result: list[str] = []
    for token in tokens:
        if not token.strip():
            continue
        value = _resolve_token(definition, token)
        if value not in result:
            result.append(value)

    if not result:
        raise NormalizationError(f"No values given for {definition.id}")
    return tuple(result)


def band_for(quantity: float, bounds: tuple[float, ...], labels: tuple[str, ...]) -> str:
    """Return the label of the first band whose upper bound is >= quantity.

    Bounds are inclusive and checked in ascending order; the last label is
    the catch-all for quantities above every bound.
    """
    for bound, label in zip(bounds, labels, strict=False):
        if quantity <= bound:
            return label
    return labels[-1]


def normalize_band(definition: "FacetDefinition", raw_value: Any) -> str:
    """Normalize a quantity into its band label.

    A range such as "$50-100" is banded by its lower end. A value equal to
    a band label ("$$") is taken as already banded.

    Bounds are inclusive upper limits, so with 30/60/100 an approximate
    "around $75" lands in "$$$" like any other 75.
    """
    if isinstance(raw_value, bool):
        raise NormalizationError(f"Boolean is not a valid value for {definition.id}")
    if isinstance(raw_value, (int, float)):
        quantity = float(raw_value)
    else:
        text = _as_text(definition, raw_value).strip()
        if text in definition.allowed_values:
            return text
        match = NUMBER_PATTERN.search(text.replace(",", ""))
        if match is None:
            raise NormalizationError(f"No quantity found in {raw_value!r} for {definition.id}")
        quantity = float(match.group())

    if quantity < 0:
        raise NormalizationError(f"Negative quantity for {definition.id}")
    return band_for(quantity, definition.band_bounds, definition.allowed_values)


def _title(part: str) -> str:
    part = " ".join(part.split())
    if part.islower():
        return " ".join(word.capitalize() for word in part.split(" "))
    return part


def normalize_location(definition: "FacetDefinition", raw_value: Any) -> str:
    """Canonicalize a "City, Region[, Country]" location.

    US states are spelled out and suffixed with "USA"; US country spellings
    collapse to "USA". A bare postal code that is also a country code
    ("Berlin, DE") is only read as a state when a US country spelling
    follows it.
    """
    text = _as_text(definition, raw_value)
    parts = [_title(p) for p in text.split(",") if p.strip()]
    if not parts or not any(ch.isalpha() for ch in "".join(parts)):
        raise NormalizationError(f"{raw_value!r} is not a location for {definition.id}")

    has_country = parts[-1].lower() in US_COUNTRY_SPELLINGS
    if has_country:
        parts[-1] = "USA"
    region_index = len(parts) - 2 if has_country else len(parts) - 1
    if region_index >= 1 or (region_index == 0 and has_country):
        region = parts[region_index]
        code = region.upper()
        state = US_STATE_NAMES.get(region.lower())
        if state is None and (has_country or code not in COUNTRY_CODE_COLLISIONS):
            state = US_STATES.get(code)
        if state is not None:
            parts[region_index] = state
            if not has_country:
                parts.append("USA")
    return ", ".join(parts)


NORMALIZERS: dict[FacetKind, Callable[["FacetDefinition", Any], "CanonicalValue"]] = {
    FacetKind.TEXT_LOCATION: normalize_location,
    FacetKind.ENUM: normalize_enum,
    FacetKind.MULTI_ENUM: normalize_multi_enum,
    FacetKind.ORDERED_BAND: normalize_band,
}
