"""Work experience request/response schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class ExperienceBase(BaseModel):
    """Base schema for work experience."""

    company: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    current: bool = False


class ExperienceCreate(ExperienceBase):
    """Schema for creating an experience."""

    @model_validator(mode="after")
    def check_current_has_no_end_date(self):
        if self.current and self.end_date is not None:
            raise ValueError("A current position cannot have an end_date")
        return self


class ExperienceUpdate(ExperienceCreate):
    """Schema for updating an experience (PUT semantics)."""

    pass


class ExperienceResponse(ExperienceBase):
    """Schema for experience response."""

    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
