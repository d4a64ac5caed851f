"""Observability: structured logging and Prometheus metrics.

Provides standardized logging primitives using structlog and the metric
objects recorded by the turn service.
"""

from facetgraph.observability.logging import PIIRedactor, get_logger, setup_logging

__all__ = ["PIIRedactor", "get_logger", "setup_logging"]
