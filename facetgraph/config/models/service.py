"""Turn service configuration models."""

from pydantic import BaseModel, Field


class ServiceConfig(BaseModel):
    """Turn service configuration."""

    subject_lock_timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Seconds a turn waits for the subject lock before SUBJECT_BUSY",
    )
