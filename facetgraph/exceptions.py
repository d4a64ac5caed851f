"""Exception hierarchy for wiring and invariant errors.

These signal bugs or misconfiguration ("alert an operator"), as opposed to
ValidationFailure values which signal user-input variability ("ask again").
"""

from pathlib import Path

from facetgraph.errors import ErrorCode


class FacetGraphError(Exception):
    """Base exception for all engine errors."""

    error_code: ErrorCode = ErrorCode.INVARIANT_VIOLATION

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CatalogError(FacetGraphError):
    """Raised when a facet, mission or phase catalog is malformed."""

    error_code = ErrorCode.CATALOG_ERROR


class DependencyCycleError(CatalogError):
    """Raised at registry load when facet dependencies form a cycle."""

    error_code = ErrorCode.DEPENDENCY_CYCLE

    def __init__(self, message: str, facet_ids: list[str]) -> None:
        super().__init__(message)
        self.facet_ids = facet_ids


class InvariantViolationError(FacetGraphError):
    """Raised when profile state contradicts the phase state machine."""

    error_code = ErrorCode.INVARIANT_VIOLATION


class MissingMissionError(InvariantViolationError):
    """Raised when role-facets is entered with no selected mission."""

    error_code = ErrorCode.MISSING_MISSION

    def __init__(self, message: str, subject_id: str | None = None) -> None:
        super().__init__(message)
        self.subject_id = subject_id


class SubjectBusyError(FacetGraphError):
    """Raised when another turn for the same subject holds the lock too long."""

    error_code = ErrorCode.SUBJECT_BUSY

    def __init__(self, message: str, subject_id: str) -> None:
        super().__init__(message)
        self.subject_id = subject_id


class ConfigurationError(FacetGraphError):
    """Raised when a TOML configuration layer is missing or invalid."""

    error_code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
