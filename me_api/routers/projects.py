"""Project CRUD endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.database import get_db
from me_api.repositories import projects as project_repository
from me_api.schemas.common import ItemResponse, ListResponse, MessageResponse, MutationResponse
from me_api.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=ListResponse[ProjectResponse])
async def list_projects(
    skill: str | None = Query(None, description="Only projects using a skill whose name contains this text"),
    db: AsyncSession = Depends(get_db),
):
    """List projects, newest first."""
    projects = await project_repository.list_projects(db, skill=skill)
    return {"count": len(projects), "data": projects}


@router.get("/{project_id}", response_model=ItemResponse[ProjectResponse])
async def get_project(project_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single project by ID."""
    project = await project_repository.get_project(db, project_id)
    return {"data": project}


@router.post("", response_model=MutationResponse[ProjectResponse], status_code=201)
async def create_project(request: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Create a new project; unknown skill names are ignored."""
    project = await project_repository.create_project(db, request)
    return {"message": "Project created successfully", "data": project}


@router.put("/{project_id}", response_model=MutationResponse[ProjectResponse])
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an existing project, replacing its skills when given."""
    project = await project_repository.update_project(db, project_id, request)
    return {"message": "Project updated successfully", "data": project}


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a project (cascade deletes its skill links)."""
    await project_repository.delete_project(db, project_id)
    return {"message": "Project deleted successfully"}
