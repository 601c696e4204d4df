"""User progress API endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from src.auth import CurrentUser
from src.exceptions import ResourceNotFoundError
from src.middleware.security import api_rate_limit, create_rate_limit_dependency

from .models import ProgressRecord
from .schemas import MasteredSectionsResponse, MasteryUpdate, SectionCreate
from .repository import ProgressRepository
from .service import ProgressService


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/user-progress",
    tags=["user-progress"],
    dependencies=[Depends(create_rate_limit_dependency(api_rate_limit))],
)


def _service(user: CurrentUser) -> ProgressService:
    return ProgressService(user.client, user.user_id)


def _repository(user: CurrentUser) -> ProgressRepository:
    return ProgressRepository(user.client, user.user_id)


@router.get("")
async def list_progress(user: CurrentUser) -> list[ProgressRecord]:
    """Get all progress for the current user, most recent first."""
    return await _service(user).get_all_progress()


@router.get("/mastered")
async def list_mastered_sections(user: CurrentUser) -> MasteredSectionsResponse:
    """Get the names of mastered sections."""
    sections = await _service(user).get_mastered_sections()
    return MasteredSectionsResponse(sections=sections)


@router.get("/{section}")
async def get_section(section: str, user: CurrentUser) -> ProgressRecord:
    """Get progress for one section."""
    record = (await _repository(user).get_section(section)).unwrap()
    if record is None:
        raise ResourceNotFoundError("Section progress", section)
    return record


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_section(payload: SectionCreate, user: CurrentUser) -> ProgressRecord:
    """Save a section the user has not seen before."""
    result = await _repository(user).save_section(payload.section, payload.mastered)
    return result.unwrap()


@router.patch("/{section}")
async def update_section(section: str, payload: MasteryUpdate, user: CurrentUser) -> ProgressRecord:
    """Set the mastered flag on an existing section."""
    result = await _repository(user).update_section(section, payload.mastered)
    return result.unwrap()


@router.put("/{section}")
async def upsert_section(section: str, payload: MasteryUpdate, user: CurrentUser) -> ProgressRecord:
    """Create or update progress for a section."""
    record = (await _repository(user).upsert_section(section, payload.mastered)).unwrap()
    logger.info(f"Upserted progress for user {user.user_id}, section '{section}': mastered={payload.mastered}")
    return record


@router.delete("/{section}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_section(section: str, user: CurrentUser) -> None:
    """Delete progress for a section. Unknown sections are not an error."""
    (await _repository(user).delete_section(section)).unwrap()
    logger.info(f"Deleted progress for user {user.user_id}, section '{section}'")
