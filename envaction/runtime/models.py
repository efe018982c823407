"""Option models for batch environment export."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ConflictPolicy(str, Enum):
    """What to do when an exported name already exists in the environment."""

    OVERWRITE = "overwrite"
    PRESERVE = "preserve"
    ERROR = "error"

    @classmethod
    def choices(cls) -> str:
        return ", ".join(policy.value for policy in cls)


class ExportOptions(BaseModel):
    """Formatting and conflict options applied to every key of a batch."""

    prefix: str = Field(
        default="",
        description="Prefix joined to each key with an underscore",
    )
    upcase: bool = Field(
        default=False,
        description="Uppercase names instead of lowercasing them",
    )
    on_conflict: ConflictPolicy = Field(
        default=ConflictPolicy.OVERWRITE,
        description="Policy for names that already exist in the environment",
    )

    @field_validator("on_conflict", mode="before")
    @classmethod
    def validate_on_conflict(cls, v: object) -> object:
        """Reject anything outside the three policy names."""
        if isinstance(v, ConflictPolicy):
            return v
        valid = {policy.value for policy in ConflictPolicy}
        if not isinstance(v, str) or v not in valid:
            raise ValueError(
                f"on-conflict input must be one of: {ConflictPolicy.choices()}"
            )
        return v
