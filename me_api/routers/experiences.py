"""Work experience CRUD endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.database import get_db
from me_api.repositories import experience as experience_repository
from me_api.schemas.common import ItemResponse, ListResponse, MessageResponse, MutationResponse
from me_api.schemas.experience import (
    ExperienceCreate,
    ExperienceResponse,
    ExperienceUpdate,
)

router = APIRouter(prefix="/api/experience", tags=["experience"])


@router.get("", response_model=ListResponse[ExperienceResponse])
async def list_experience(db: AsyncSession = Depends(get_db)):
    """List work experience, most recent first."""
    entries = await experience_repository.list_experience(db)
    return {"count": len(entries), "data": entries}


@router.get("/{experience_id}", response_model=ItemResponse[ExperienceResponse])
async def get_experience(experience_id: int, db: AsyncSession = Depends(get_db)):
    experience = await experience_repository.get_experience(db, experience_id)
    return {"data": experience}


@router.post("", response_model=MutationResponse[ExperienceResponse], status_code=201)
async def create_experience(request: ExperienceCreate, db: AsyncSession = Depends(get_db)):
    experience = await experience_repository.create_experience(db, request)
    return {"message": "Work experience created successfully", "data": experience}


@router.put("/{experience_id}", response_model=MutationResponse[ExperienceResponse])
async def update_experience(
    experience_id: int,
    request: ExperienceUpdate,
    db: AsyncSession = Depends(get_db),
):
    experience = await experience_repository.update_experience(db, experience_id, request)
    return {"message": "Work experience updated successfully", "data": experience}


@router.delete("/{experience_id}", response_model=MessageResponse)
async def delete_experience(experience_id: int, db: AsyncSession = Depends(get_db)):
    await experience_repository.delete_experience(db, experience_id)
    return {"message": "Work experience deleted successfully"}
