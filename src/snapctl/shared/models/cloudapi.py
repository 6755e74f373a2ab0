"""CloudAPI Response Models.

Pydantic models validating CloudAPI responses at the external API boundary.
They live in shared so core modules can use them without importing from the
services layer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Instance(BaseModel):
    """An instance (machine) as listed by CloudAPI."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    state: str | None = None


class Snapshot(BaseModel):
    """An instance snapshot as reported by CloudAPI."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    state: str
    created: str | None = None
    updated: str | None = None


class DeleteResult(BaseModel):
    """Result of a snapshot delete request.

    ``instance_id`` is the resolved instance UUID, used by the follow-up
    state query.
    """

    model_config = ConfigDict(frozen=True)

    instance_id: str = Field(min_length=1)
    name: str
