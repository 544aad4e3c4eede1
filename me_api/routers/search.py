"""Search endpoints across profile, skills, projects and work experience."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.database import get_db
from me_api.schemas.search import AdvancedSearchResponse, SearchResponse
from me_api.services import search as search_service

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    q: str | None = Query(None, description="Search text, at least 2 characters"),
    db: AsyncSession = Depends(get_db),
):
    """Search every source; exact title matches rank first."""
    return await search_service.search(db, q)


@router.get("/advanced", response_model=AdvancedSearchResponse)
async def advanced_search(
    q: str | None = Query(None, description="Search text, at least 2 characters"),
    search_type: str | None = Query(
        None, alias="type", description="One of: profile, skill, project, work"
    ),
    category: str | None = Query(None, description="Skill category (with type=skill)"),
    limit: int = Query(search_service.DEFAULT_LIMIT, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
):
    """Search with source/category filters; results are capped, not ranked."""
    return await search_service.advanced_search(
        db,
        q,
        search_type=search_type,
        category=category,
        limit=limit,
    )
