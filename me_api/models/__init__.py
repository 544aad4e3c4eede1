"""Database models for the portfolio API."""

from .base import Base
from .experience import WorkExperience
from .profile import Profile
from .project import Project, ProjectSkill
from .skill import Skill

__all__ = [
    "Base",
    "Profile",
    "Skill",
    "Project",
    "ProjectSkill",
    "WorkExperience",
]
