"""Profile request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .common import blank_to_none


class ProfileBase(BaseModel):
    """Base schema for the profile."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    education: str | None = None
    github: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    portfolio: str | None = Field(None, max_length=500)

    @field_validator("education", "github", "linkedin", "portfolio")
    @classmethod
    def optional_blank_to_none(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ProfileCreate(ProfileBase):
    """Schema for creating the profile."""

    pass


class ProfileUpdate(ProfileBase):
    """Schema for replacing the profile (PUT semantics, name/email required)."""

    pass


class ProfileResponse(ProfileBase):
    """Schema for profile response."""

    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
