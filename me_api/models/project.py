"""Project and ProjectSkill models for portfolio projects."""

from typing import List, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .skill import Skill


class Project(Base, TimestampMixin):
    """Portfolio project model."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Project Information
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # External links
    github_link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    live_link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Read-only view of linked skills; writes go through ProjectSkill rows
    linked_skills: Mapped[List[Skill]] = relationship(
        secondary="project_skills",
        order_by=Skill.name,
        lazy="selectin",  # Async-friendly eager loading
        viewonly=True,
    )

    @property
    def skills(self) -> list[str]:
        """Names of the skills linked to this project."""
        return [skill.name for skill in self.linked_skills]

    def __repr__(self) -> str:
        return f"<Project(title='{self.title}')>"


class ProjectSkill(Base):
    """Association row linking a project to a skill."""

    __tablename__ = "project_skills"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,  # Index for faster joins
    )
    skill_id: Mapped[int] = mapped_column(
        ForeignKey("skills.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ProjectSkill(project_id={self.project_id}, skill_id={self.skill_id})>"
