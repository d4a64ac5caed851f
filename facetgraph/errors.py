"""Failure models returned as data for recoverable input problems.

Validation-class problems (bad user input, unknown mission ids) are expected
and are handed back to the caller so a re-prompt can be generated. They are
never raised.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """Machine-readable failure and error codes."""

    UNKNOWN_FACET = "UNKNOWN_FACET"
    """The facet id is not in the registry."""

    INVALID_VALUE = "INVALID_VALUE"
    """The raw value could not be normalized for the facet."""

    UNKNOWN_MISSION = "UNKNOWN_MISSION"
    """The candidate mission id is not in the catalog."""

    LOW_CONFIDENCE = "LOW_CONFIDENCE"
    """The mission candidate confidence is below the selection threshold."""

    MISSION_ALREADY_SELECTED = "MISSION_ALREADY_SELECTED"
    """A different mission is already selected; an override is required."""

    OVERRIDE_NOT_ALLOWED = "OVERRIDE_NOT_ALLOWED"
    """A mission override was requested outside the role-facets phase."""

    MISSION_NOT_EXPECTED = "MISSION_NOT_EXPECTED"
    """A mission candidate arrived before the mission-selection phase."""

    CATALOG_ERROR = "CATALOG_ERROR"
    """A static catalog is malformed."""

    DEPENDENCY_CYCLE = "DEPENDENCY_CYCLE"
    """A facet depends on itself, directly or transitively."""

    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
    """Engine state is inconsistent with its wiring."""

    MISSING_MISSION = "MISSING_MISSION"
    """role-facets was entered without a selected mission."""

    SUBJECT_BUSY = "SUBJECT_BUSY"
    """Another turn for the subject is still being processed."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """A configuration layer is missing or invalid."""


class ValidationFailure(BaseModel):
    """A single rejected candidate, returned to the caller."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode = Field(..., description="Failure code")
    message: str = Field(..., description="Human-readable reason")
    facet_id: str | None = Field(default=None, description="Rejected facet")
    mission_id: str | None = Field(default=None, description="Rejected mission")
    raw_value: Any = Field(default=None, description="Value as received")
