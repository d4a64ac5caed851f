"""Onboarding engine configuration models.

Defines phase thresholds and mission selection behavior loaded from TOML.
"""

from pydantic import BaseModel, Field


class PhaseThresholdsConfig(BaseModel):
    """Completion threshold per phase."""

    core_facets: float = Field(
        default=0.75, ge=0.0, le=1.0, description="core-facets threshold"
    )
    mission_selection: float = Field(
        default=1.0, ge=0.0, le=1.0, description="mission-selection threshold"
    )
    role_facets: float = Field(
        default=1.0, ge=0.0, le=1.0, description="role-facets threshold"
    )
    mission_overrides: float = Field(
        default=0.5, ge=0.0, le=1.0, description="mission-overrides threshold"
    )


class CoreFacetsConfig(BaseModel):
    """Facets collected before a mission is chosen."""

    required: list[str] = Field(
        default_factory=lambda: ["location", "gender", "commsPref"],
        description="Required core facet ids, in ask order",
    )
    optional: list[str] = Field(
        default_factory=lambda: ["languages"],
        description="Optional core facet ids",
    )


class EngineConfig(BaseModel):
    """Onboarding engine configuration."""

    acting_role: str = Field(
        default="member",
        description="Role namespace every mission implicitly acts in",
    )
    mission_confidence_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Min extractor confidence to accept a mission candidate",
    )
    thresholds: PhaseThresholdsConfig = Field(
        default_factory=PhaseThresholdsConfig,
        description="Per-phase completion thresholds",
    )
    core_facets: CoreFacetsConfig = Field(
        default_factory=CoreFacetsConfig,
        description="Core facet lists",
    )
