"""Pydantic schemas for Skills API.

This module defines the request and response schemas for the skill
management endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from me_api.models.skill import MAX_PROFICIENCY, MIN_PROFICIENCY

from .common import blank_to_none


class SkillBase(BaseModel):
    """Fields shared by skill requests and responses."""

    name: str = Field(..., min_length=1, max_length=255, description="Skill name (e.g., 'Python', 'React')")
    proficiency: int = Field(
        ...,
        ge=MIN_PROFICIENCY,
        le=MAX_PROFICIENCY,
        description="Proficiency from 1 (basic) to 5 (expert)",
    )
    category: str | None = Field(None, max_length=100, description="Skill category (e.g., 'Frontend', 'Backend')")

    @field_validator("category")
    @classmethod
    def category_blank_to_none(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class SkillCreate(SkillBase):
    """Schema for creating a single skill."""

    pass


class SkillUpdate(SkillBase):
    """Schema for updating a skill (PUT semantics, name/proficiency required)."""

    pass


class SkillResponse(SkillBase):
    """Schema for skill response."""

    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""
        from_attributes = True


class SkillCategoryResponse(BaseModel):
    """A category with the number of skills filed under it."""

    category: str
    skill_count: int
