"""Skills API router.

Listing endpoints order skills by proficiency (desc) then name (asc).
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.database import get_db
from me_api.repositories import skills as skill_repository
from me_api.schemas.common import ItemResponse, ListResponse, MessageResponse, MutationResponse
from me_api.schemas.skill import (
    SkillCategoryResponse,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.get("", response_model=ListResponse[SkillResponse])
async def list_skills(db: AsyncSession = Depends(get_db)):
    """List all skills."""
    skills = await skill_repository.list_skills(db)
    return {"count": len(skills), "data": skills}


@router.get("/top", response_model=ListResponse[SkillResponse])
async def list_top_skills(
    limit: int = Query(5, ge=1, description="Maximum number of skills to return"),
    category: str | None = Query(None, description="Filter by category"),
    db: AsyncSession = Depends(get_db),
):
    """List skills with proficiency 4 or higher.

    Args:
        limit: Maximum number of skills to return
        category: Optional exact category filter
        db: Database session
    """
    skills = await skill_repository.list_top_skills(db, limit=limit, category=category)
    return {"count": len(skills), "data": skills}


@router.get("/categories", response_model=ListResponse[SkillCategoryResponse])
async def list_skill_categories(db: AsyncSession = Depends(get_db)):
    """List skill categories with the number of skills in each."""
    categories = await skill_repository.list_categories(db)
    return {"count": len(categories), "data": categories}


@router.get("/{skill_id}", response_model=ItemResponse[SkillResponse])
async def get_skill(skill_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single skill by ID."""
    skill = await skill_repository.get_skill(db, skill_id)
    return {"data": skill}


@router.post("", response_model=MutationResponse[SkillResponse], status_code=201)
async def create_skill(request: SkillCreate, db: AsyncSession = Depends(get_db)):
    """Create a skill; 409 if the name is taken."""
    skill = await skill_repository.create_skill(db, request)
    return {"message": "Skill created successfully", "data": skill}


@router.put("/{skill_id}", response_model=MutationResponse[SkillResponse])
async def update_skill(
    skill_id: int,
    request: SkillUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a skill."""
    skill = await skill_repository.update_skill(db, skill_id, request)
    return {"message": "Skill updated successfully", "data": skill}


@router.delete("/{skill_id}", response_model=MessageResponse)
async def delete_skill(skill_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a skill and unlink it from every project."""
    await skill_repository.delete_skill(db, skill_id)
    return {"message": "Skill deleted successfully"}
