"""Best-effort progress accessors.

Thin convenience layer over ``ProgressRepository``: failures are logged and
collapsed into a safe default (empty list, ``None`` or ``False``) instead of
being returned to the caller.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from .models import ProgressRecord
from .repository import ProgressRepository
from .results import Err, Ok, Result


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressService:
    """Service for reading and writing section mastery for one user."""

    def __init__(
        self,
        client: Any,
        user_id: UUID | None = None,
        *,
        table: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize progress service."""
        self.repository = ProgressRepository(client, user_id, table=table, clock=clock)

    @staticmethod
    def _or_default(result: Result[T], default: T) -> T:
        if isinstance(result, Err):
            logger.error(f"Error {result.operation}: {result.message}")
            return default
        return result.value

    async def get_all_progress(self) -> list[ProgressRecord]:
        """Get all progress rows, newest first. Empty on failure."""
        return self._or_default(await self.repository.get_all_progress(), [])

    async def get_section(self, section: str) -> ProgressRecord | None:
        """Get progress for one section, or None."""
        result = await self.repository.get_section(section)
        if isinstance(result, Ok) and result.value is None:
            logger.debug(f"No progress found for section '{section}'")
        return self._or_default(result, None)

    async def save_section(self, section: str, mastered: bool = False) -> ProgressRecord | None:
        """Save a section the user has not seen before."""
        return self._or_default(await self.repository.save_section(section, mastered), None)

    async def update_section(self, section: str, mastered: bool) -> ProgressRecord | None:
        """Mark an existing section as mastered or not."""
        return self._or_default(await self.repository.update_section(section, mastered), None)

    async def upsert_section(self, section: str, mastered: bool) -> ProgressRecord | None:
        """Save or update in one call. Prefer this when existence is unknown."""
        record = self._or_default(await self.repository.upsert_section(section, mastered), None)
        if record is not None:
            logger.info(f"Upserted progress for section '{section}': mastered={mastered}")
        return record

    async def delete_section(self, section: str) -> bool:
        """Delete a section's progress. True unless the request failed."""
        return self._or_default(await self.repository.delete_section(section), False)

    async def get_mastered_sections(self) -> list[str]:
        """Get the names of mastered sections."""
        return self._or_default(await self.repository.get_mastered_sections(), [])

    async def section_exists(self, section: str) -> bool:
        """Check whether the user has progress for a section."""
        return self._or_default(await self.repository.section_exists(section), False)
