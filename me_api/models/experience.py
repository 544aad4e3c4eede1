"""WorkExperience model for professional work history."""

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class WorkExperience(Base, TimestampMixin):
    """Professional work experience model."""

    __tablename__ = "work_experience"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Company Information
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Date Range (end_date of None means ongoing)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    current: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<WorkExperience(company='{self.company}', position='{self.position}')>"
