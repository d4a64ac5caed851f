"""Configuration section models."""

from facetgraph.config.models.engine import (
    CoreFacetsConfig,
    EngineConfig,
    PhaseThresholdsConfig,
)
from facetgraph.config.models.observability import LoggingConfig, ObservabilityConfig
from facetgraph.config.models.service import ServiceConfig

__all__ = [
    "CoreFacetsConfig",
    "EngineConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "PhaseThresholdsConfig",
    "ServiceConfig",
]
