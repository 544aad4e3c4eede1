"""Skill repository: CRUD plus top-skill and category listings."""

import logging

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.errors import ConflictError, NotFoundError, storage_errors
from me_api.models import Skill
from me_api.schemas.skill import SkillCreate, SkillUpdate

logger = logging.getLogger(__name__)

TOP_SKILL_MIN_PROFICIENCY = 4


async def _find_by_name(db: AsyncSession, name: str) -> Skill | None:
    result = await db.execute(select(Skill).where(Skill.name == name))
    return result.scalar_one_or_none()


async def _commit_unique_name(db: AsyncSession, name: str) -> None:
    # The unique index on name catches inserts that raced past _find_by_name
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(f'A skill with name "{name}" already exists') from e


@storage_errors("Failed to fetch skills")
async def list_skills(db: AsyncSession) -> list[Skill]:
    """List every skill, strongest first, then alphabetically."""
    result = await db.execute(
        select(Skill).order_by(Skill.proficiency.desc(), Skill.name.asc())
    )
    return list(result.scalars().all())


@storage_errors("Failed to fetch top skills")
async def list_top_skills(
    db: AsyncSession,
    limit: int = 5,
    category: str | None = None,
) -> list[Skill]:
    """List skills rated 4 or higher, optionally within one category.

    Args:
        db: Database session
        limit: Maximum number of skills to return
        category: Exact category to restrict to

    Returns:
        Up to ``limit`` skills ordered by proficiency desc, name asc
    """
    query = select(Skill).where(Skill.proficiency >= TOP_SKILL_MIN_PROFICIENCY)

    if category:
        query = query.where(Skill.category == category)

    query = query.order_by(Skill.proficiency.desc(), Skill.name.asc()).limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


@storage_errors("Failed to fetch skill categories")
async def list_categories(db: AsyncSession) -> list[dict]:
    """List distinct categories with their skill counts, largest first."""
    skill_count = func.count(Skill.id).label("skill_count")
    result = await db.execute(
        select(Skill.category, skill_count)
        .where(Skill.category.is_not(None))
        .group_by(Skill.category)
        .order_by(desc("skill_count"), Skill.category)
    )
    return [
        {"category": category, "skill_count": count}
        for category, count in result.all()
    ]


@storage_errors("Failed to fetch skill")
async def get_skill(db: AsyncSession, skill_id: int) -> Skill:
    """Get a single skill by ID.

    Raises:
        NotFoundError: If the skill does not exist
    """
    skill = await db.get(Skill, skill_id)
    if skill is None:
        raise NotFoundError(f"No skill found with ID {skill_id}")
    return skill


@storage_errors("Failed to create skill")
async def create_skill(db: AsyncSession, data: SkillCreate) -> Skill:
    """Create a skill.

    Raises:
        ConflictError: If a skill with the same name exists
    """
    if await _find_by_name(db, data.name) is not None:
        raise ConflictError(f'A skill with name "{data.name}" already exists')

    skill = Skill(**data.model_dump())
    db.add(skill)
    await _commit_unique_name(db, data.name)
    await db.refresh(skill)

    logger.info(f"Created skill {skill.id} ({skill.name})")
    return skill


@storage_errors("Failed to update skill")
async def update_skill(db: AsyncSession, skill_id: int, data: SkillUpdate) -> Skill:
    """Replace a skill's name, proficiency and category.

    Raises:
        NotFoundError: If the skill does not exist
        ConflictError: If the new name belongs to another skill
    """
    skill = await db.get(Skill, skill_id)
    if skill is None:
        raise NotFoundError(f"No skill found with ID {skill_id}")

    if data.name != skill.name:
        other = await _find_by_name(db, data.name)
        if other is not None:
            raise ConflictError(f'A skill with name "{data.name}" already exists')

    for field, value in data.model_dump().items():
        setattr(skill, field, value)

    await _commit_unique_name(db, data.name)
    await db.refresh(skill)

    logger.info(f"Updated skill {skill_id}")
    return skill


@storage_errors("Failed to delete skill")
async def delete_skill(db: AsyncSession, skill_id: int) -> None:
    """Delete a skill; its project links are removed by ON DELETE CASCADE.

    Raises:
        NotFoundError: If the skill does not exist
    """
    skill = await db.get(Skill, skill_id)
    if skill is None:
        raise NotFoundError(f"No skill found with ID {skill_id}")

    await db.delete(skill)
    await db.commit()

    logger.info(f"Deleted skill {skill_id}")
