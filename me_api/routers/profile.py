"""Profile endpoints (singleton resource)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.database import get_db
from me_api.repositories import profile as profile_repository
from me_api.schemas.common import ItemResponse, MutationResponse
from me_api.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ItemResponse[ProfileResponse])
async def get_profile(db: AsyncSession = Depends(get_db)):
    """Get the profile (404 until one is created)."""
    profile = await profile_repository.get_profile(db)
    return {"data": profile}


@router.post("", response_model=MutationResponse[ProfileResponse], status_code=201)
async def create_profile(
    request: ProfileCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create the profile; 409 if one already exists."""
    profile = await profile_repository.create_profile(db, request)
    return {"message": "Profile created successfully", "data": profile}


@router.put("", response_model=MutationResponse[ProfileResponse])
async def update_profile(
    request: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Replace the profile; 404 if none exists."""
    profile = await profile_repository.update_profile(db, request)
    return {"message": "Profile updated successfully", "data": profile}
