"""Project repository.

Projects reference skills by name on the way in. Names are resolved to skill
ids; names with no matching skill are skipped without error. The stored links
live in ``project_skills`` and are read back through ``Project.skills``.
"""

import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.errors import NotFoundError, storage_errors
from me_api.models import Project, ProjectSkill, Skill
from me_api.schemas.project import ProjectCreate, ProjectUpdate
from me_api.utils.sql import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("title", "description", "github_link", "live_link")


async def _load_project(db: AsyncSession, project_id: int) -> Project | None:
    # populate_existing reloads linked_skills after association rows changed
    result = await db.execute(
        select(Project)
        .where(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def resolve_skill_ids(db: AsyncSession, names: list[str]) -> list[int]:
    """Map skill names to ids, dropping unknown names and duplicates.

    Args:
        db: Database session
        names: Skill names in request order

    Returns:
        Ids of the skills that exist, in first-seen order
    """
    unique_names = list(dict.fromkeys(names))
    if not unique_names:
        return []

    result = await db.execute(
        select(Skill.id, Skill.name).where(Skill.name.in_(unique_names))
    )
    ids_by_name = {name: skill_id for skill_id, name in result.all()}

    skipped = [name for name in unique_names if name not in ids_by_name]
    if skipped:
        logger.debug(f"Skipping unknown skills: {skipped}")

    return [ids_by_name[name] for name in unique_names if name in ids_by_name]


async def replace_project_skills(
    db: AsyncSession,
    project_id: int,
    names: list[str],
) -> list[int]:
    """Replace a project's skill links with the skills named in ``names``.

    Existing links are deleted, then the resolved set is inserted. Both
    statements run in the caller's transaction, which the caller commits.

    Returns:
        Ids of the skills now linked to the project
    """
    skill_ids = await resolve_skill_ids(db, names)

    await db.execute(delete(ProjectSkill).where(ProjectSkill.project_id == project_id))
    if skill_ids:
        await db.execute(
            insert(ProjectSkill),
            [{"project_id": project_id, "skill_id": skill_id} for skill_id in skill_ids],
        )
    return skill_ids


@storage_errors("Failed to fetch projects")
async def list_projects(db: AsyncSession, skill: str | None = None) -> list[Project]:
    """List projects, newest first.

    Args:
        db: Database session
        skill: Keep only projects linked to a skill whose name contains this
            text (case-insensitive)

    Returns:
        Projects with their skills loaded
    """
    query = select(Project)

    if skill:
        matching_projects = (
            select(ProjectSkill.project_id)
            .join(Skill, Skill.id == ProjectSkill.skill_id)
            .where(Skill.name.ilike(contains_pattern(skill), escape=LIKE_ESCAPE))
        )
        query = query.where(Project.id.in_(matching_projects))

    query = query.order_by(Project.created_at.desc(), Project.id.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


@storage_errors("Failed to fetch project")
async def get_project(db: AsyncSession, project_id: int) -> Project:
    """Get a single project by ID.

    Raises:
        NotFoundError: If the project does not exist
    """
    project = await _load_project(db, project_id)
    if project is None:
        raise NotFoundError(f"No project found with ID {project_id}")
    return project


@storage_errors("Failed to create project")
async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    """Create a project and link the named skills."""
    project = Project(**data.model_dump(include=set(PROJECT_FIELDS)))
    db.add(project)
    await db.flush()

    if data.skills:
        await replace_project_skills(db, project.id, data.skills)
    await db.commit()

    logger.info(f"Created project {project.id} ({project.title})")
    return await _load_project(db, project.id)


@storage_errors("Failed to update project")
async def update_project(db: AsyncSession, project_id: int, data: ProjectUpdate) -> Project:
    """Update a project's fields and, when given, replace its skill set.

    Raises:
        NotFoundError: If the project does not exist
    """
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFoundError(f"No project found with ID {project_id}")

    for field, value in data.model_dump(include=set(PROJECT_FIELDS)).items():
        setattr(project, field, value)
    await db.flush()

    if data.skills is not None:
        skill_ids = await replace_project_skills(db, project_id, data.skills)
        logger.info(f"Project {project_id} now linked to {len(skill_ids)} skills")
    await db.commit()

    logger.info(f"Updated project {project_id}")
    return await _load_project(db, project_id)


@storage_errors("Failed to delete project")
async def delete_project(db: AsyncSession, project_id: int) -> None:
    """Delete a project; its skill links are removed by ON DELETE CASCADE.

    Raises:
        NotFoundError: If the project does not exist
    """
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFoundError(f"No project found with ID {project_id}")

    await db.delete(project)
    await db.commit()

    logger.info(f"Deleted project {project_id}")
