"""Schemas for the user progress API."""

from pydantic import BaseModel, Field


class SectionCreate(BaseModel):
    """Schema for saving a new section."""

    section: str = Field(..., min_length=1, max_length=255, description="Topic name")
    mastered: bool = False


class MasteryUpdate(BaseModel):
    """Schema for setting a section's mastered flag."""

    mastered: bool


class MasteredSectionsResponse(BaseModel):
    """Schema for the list of mastered section names."""

    sections: list[str]
