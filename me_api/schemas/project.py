"""Project request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .common import blank_to_none


class ProjectBase(BaseModel):
    """Base schema for project."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    github_link: str | None = Field(None, max_length=500)
    live_link: str | None = Field(None, max_length=500)

    @field_validator("github_link", "live_link")
    @classmethod
    def link_blank_to_none(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ProjectCreate(ProjectBase):
    """Schema for creating a project.

    ``skills`` holds skill names; names with no matching skill are ignored.
    """

    skills: list[str] | None = None


class ProjectUpdate(ProjectBase):
    """Schema for updating a project.

    When ``skills`` is given it replaces the whole skill set; when omitted the
    existing links are kept.
    """

    skills: list[str] | None = None


class ProjectResponse(ProjectBase):
    """Schema for project response with linked skill names."""

    id: int
    skills: list[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
