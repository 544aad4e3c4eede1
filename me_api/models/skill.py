"""Skill model for the portfolio's technical skills."""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

MIN_PROFICIENCY = 1
MAX_PROFICIENCY = 5


class Skill(Base, TimestampMixin):
    """Technical skill with a 1-5 proficiency rating.

    Skills are linked to projects through ``project_skills``; deleting a skill
    drops those links via ``ON DELETE CASCADE``.
    """

    __tablename__ = "skills"
    __table_args__ = (
        CheckConstraint(
            f"proficiency >= {MIN_PROFICIENCY} AND proficiency <= {MAX_PROFICIENCY}",
            name="ck_skills_proficiency_range",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True
    )
    proficiency: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)

    def __repr__(self) -> str:
        """String representation of Skill."""
        return f"<Skill(id={self.id}, name='{self.name}', category='{self.category}')>"
