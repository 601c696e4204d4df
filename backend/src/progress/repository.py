"""Strict data access for the ``user_progress`` table.

Every method issues exactly one PostgREST request through the injected
Supabase client and returns a tagged ``Result``. Store failures are never
raised; other exceptions (bad rows, programming errors) propagate.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError

from src.config.settings import get_settings

from .models import CONFLICT_KEY, ProgressRecord
from .results import Err, ErrorKind, Ok, Result


logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProgressRepository:
    """Per-user CRUD over section mastery rows.

    ``user_id`` is optional: when given it is written on created rows and
    added as a filter on every query; when omitted the table's row-level
    policy binds rows to the authenticated user, as the Supabase client
    does for browser callers.
    """

    def __init__(
        self,
        client: Any,
        user_id: UUID | None = None,
        *,
        table: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize repository with a Supabase client and resolved identity."""
        self.client = client
        self.user_id = user_id
        self.table_name = table or get_settings().USER_PROGRESS_TABLE
        self._clock = clock or _utcnow

    def _table(self) -> Any:
        return self.client.table(self.table_name)

    def _scoped(self, query: Any) -> Any:
        if self.user_id is not None:
            return query.eq("user_id", str(self.user_id))
        return query

    def _payload(self, **fields: Any) -> dict[str, Any]:
        if self.user_id is not None:
            fields["user_id"] = str(self.user_id)
        return fields

    def _now(self) -> str:
        return self._clock().isoformat()

    async def _execute(self, operation: str, query: Any) -> Result[list[dict[str, Any]]]:
        try:
            response = await query.execute()
        except APIError as e:
            kind = ErrorKind.CONSTRAINT if e.code == UNIQUE_VIOLATION else ErrorKind.QUERY
            logger.debug(f"PostgREST error while {operation}: code={e.code} message={e.message}")
            return Err(kind, operation, e.message or str(e))
        except httpx.HTTPError as e:
            return Err(ErrorKind.TRANSPORT, operation, str(e) or type(e).__name__)

        return Ok(response.data or [])

    async def _single_row(self, operation: str, query: Any) -> Result[ProgressRecord]:
        result = await self._execute(operation, query)
        if not result.ok:
            return result
        if not result.value:
            return Err(ErrorKind.QUERY, operation, "no row returned")
        return Ok(ProgressRecord.from_row(result.value[0]))

    async def get_all_progress(self) -> Result[list[ProgressRecord]]:
        """Get every row for the user, most recently updated first."""
        query = self._scoped(self._table().select("*")).order("updated_at", desc=True)
        result = await self._execute("fetching progress", query)
        if not result.ok:
            return result
        return Ok([ProgressRecord.from_row(row) for row in result.value])

    async def get_section(self, section: str) -> Result[ProgressRecord | None]:
        """Get the row for one section; ``Ok(None)`` when it does not exist."""
        # (user_id, section) is unique, so limit(1) behaves like maybe_single
        # without depending on how the client reports zero rows.
        query = self._scoped(self._table().select("*").eq("section", section)).limit(1)
        result = await self._execute("fetching section", query)
        if not result.ok:
            return result
        if not result.value:
            return Ok(None)
        return Ok(ProgressRecord.from_row(result.value[0]))

    async def save_section(self, section: str, mastered: bool = False) -> Result[ProgressRecord]:
        """Create a row; fails with CONSTRAINT if the section already exists."""
        payload = self._payload(section=section, mastered=mastered, updated_at=self._now())
        return await self._single_row("saving section", self._table().insert(payload))

    async def update_section(self, section: str, mastered: bool) -> Result[ProgressRecord]:
        """Set the mastered flag on an existing row; NOT_FOUND if there is none."""
        payload = {"mastered": mastered, "updated_at": self._now()}
        query = self._scoped(self._table().update(payload).eq("section", section))
        result = await self._execute("updating section", query)
        if not result.ok:
            return result
        if not result.value:
            return Err(ErrorKind.NOT_FOUND, "updating section", f"no progress for section '{section}'")
        return Ok(ProgressRecord.from_row(result.value[0]))

    async def upsert_section(self, section: str, mastered: bool) -> Result[ProgressRecord]:
        """Create or overwrite the row keyed on (user_id, section)."""
        payload = self._payload(section=section, mastered=mastered, updated_at=self._now())
        query = self._table().upsert(payload, on_conflict=CONFLICT_KEY)
        return await self._single_row("upserting section", query)

    async def delete_section(self, section: str) -> Result[bool]:
        """Delete the row for a section. Deleting a missing section succeeds."""
        query = self._scoped(self._table().delete().eq("section", section))
        result = await self._execute("deleting section", query)
        if not result.ok:
            return result
        return Ok(True)

    async def get_mastered_sections(self) -> Result[list[str]]:
        """Get the names of all mastered sections."""
        query = self._scoped(self._table().select("section").eq("mastered", True))
        result = await self._execute("fetching mastered sections", query)
        if not result.ok:
            return result
        return Ok([row["section"] for row in result.value])

    async def section_exists(self, section: str) -> Result[bool]:
        """Check whether a row exists for the section."""
        query = self._scoped(self._table().select("id").eq("section", section)).limit(1)
        result = await self._execute("checking section", query)
        if not result.ok:
            return result
        return Ok(bool(result.value))
