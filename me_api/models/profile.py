"""Profile model: the single owner of the portfolio."""

from typing import Optional

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


PROFILE_ID = 1


class Profile(Base, TimestampMixin):
    """Portfolio owner. The table holds at most one row, always with id 1."""

    __tablename__ = "profile"
    __table_args__ = (CheckConstraint(f"id = {PROFILE_ID}", name="ck_profile_singleton"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False, default=PROFILE_ID)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    education: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Links
    github: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    linkedin: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    portfolio: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Profile(name='{self.name}', email='{self.email}')>"
