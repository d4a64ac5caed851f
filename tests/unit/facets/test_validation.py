"""Tests for FacetValidator."""

import pytest

from facetgraph.errors import ErrorCode, ValidationFailure
from facetgraph.facets.models import FacetUpdate
from facetgraph.facets.validation import FacetValidator


@pytest.fixture
def validator(registry) -> FacetValidator:
    return FacetValidator(registry)


class TestValidate:
    """Tests for single-value validation."""

    def test_returns_canonical_value(self, validator: FacetValidator) -> None:
        assert validator.validate("gender", "Female") == "female"
        assert validator.validate("commsPref", "video and text") == ("video", "text")
        assert validator.validate("location", "Seattle, Washington") == (
            "Seattle, Washington, USA"
        )

    def test_unknown_facet(self, validator: FacetValidator) -> None:
        result = validator.validate("favouriteColour", "blue")

        assert isinstance(result, ValidationFailure)
        assert result.code == ErrorCode.UNKNOWN_FACET
        assert result.facet_id == "favouriteColour"
        assert result.raw_value == "blue"

    def test_invalid_value(self, validator: FacetValidator) -> None:
        result = validator.validate("gender", "martian")

        assert isinstance(result, ValidationFailure)
        assert result.code == ErrorCode.INVALID_VALUE
        assert result.facet_id == "gender"
        assert "martian" in result.message

    def test_step_alias(self, validator: FacetValidator) -> None:
        assert validator.validate("step", "Step 3") == "3"
        assert validator.validate("step", 3) == "3"

    def test_step_out_of_range(self, validator: FacetValidator) -> None:
        result = validator.validate("step", "13")
        assert isinstance(result, ValidationFailure)
        assert result.code == ErrorCode.INVALID_VALUE


class TestValidateMany:
    """Tests for batch validation."""

    def test_splits_accepted_and_failures(self, validator: FacetValidator) -> None:
        accepted, failures = validator.validate_many(
            [
                FacetUpdate(facet_id="gender", raw_value="martian"),
                FacetUpdate(facet_id="budget", raw_value="$50-100"),
                FacetUpdate(facet_id="unknown", raw_value="x"),
            ]
        )

        assert accepted == {"budget": "$$"}
        assert [f.code for f in failures] == [ErrorCode.INVALID_VALUE, ErrorCode.UNKNOWN_FACET]

    def test_later_update_wins(self, validator: FacetValidator) -> None:
        accepted, failures = validator.validate_many(
            [
                FacetUpdate(facet_id="budget", raw_value=20),
                FacetUpdate(facet_id="budget", raw_value=80),
            ]
        )

        assert accepted == {"budget": "$$$"}
        assert failures == []

    def test_empty_batch(self, validator: FacetValidator) -> None:
        assert validator.validate_many([]) == ({}, [])
