"""Response envelopes shared by every endpoint.

Successful responses are wrapped as ``{"success": true, ...}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ItemResponse(BaseModel, Generic[T]):
    """Single record."""

    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """List of records with their count."""

    success: bool = True
    count: int
    data: list[T]


class MutationResponse(BaseModel, Generic[T]):
    """Record returned after a create or update."""

    success: bool = True
    message: str
    data: T


class MessageResponse(BaseModel):
    """Acknowledgement without a payload (deletes)."""

    success: bool = True
    message: str


def blank_to_none(value: str | None) -> str | None:
    """Treat empty or whitespace-only optional strings as missing."""
    if value is None or not value.strip():
        return None
    return value
