"""Progress models for per-user section mastery."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


# Unique key on the table; upserts resolve conflicts against it
CONFLICT_KEY = "user_id,section"


class ProgressRecord(BaseModel):
    """One row of ``user_progress``: a user's mastery flag for one section."""

    model_config = ConfigDict(from_attributes=True)

    id: int | str
    user_id: UUID | None = None
    section: str
    mastered: bool = False
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ProgressRecord":
        """Build a record from a row returned by PostgREST."""
        return cls.model_validate(row)
