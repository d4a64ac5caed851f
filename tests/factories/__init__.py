"""Test factories for creating test data."""

from tests.factories.onboarding import FacetDefinitionFactory, ProfileFactory

__all__ = [
    "FacetDefinitionFactory",
    "ProfileFactory",
]
