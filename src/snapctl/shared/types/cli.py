"""
CLI-related Type Definitions

This module provides the option models for CLI commands.

These types ensure CLI arguments are validated at the boundary,
preventing invalid data from propagating into the core logic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SnapshotDeleteOptions(BaseModel):
    """Validated arguments of ``snapctl snapshot delete``.

    Attributes:
        instance: Instance name, short id or UUID
        names: Snapshot names, in the order given on the command line
        force: Skip the confirmation prompt
        wait: Number of times ``--wait`` was given
    """

    model_config = ConfigDict(frozen=True)

    instance: str = Field(..., min_length=1, description="Instance name, short id or UUID")
    names: list[str] = Field(..., min_length=1, description="Snapshot names to delete")
    force: bool = Field(default=False, description="Skip confirmation")
    wait: int = Field(default=0, ge=0, description="Wait intensity (count of --wait)")

    @field_validator("instance")
    @classmethod
    def _strip_instance(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "instance must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("names")
    @classmethod
    def _check_names(cls, value: list[str]) -> list[str]:
        if any(not name.strip() for name in value):
            msg = "snapshot names must not be blank"
            raise ValueError(msg)
        return value
