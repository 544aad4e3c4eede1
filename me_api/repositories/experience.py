"""Work experience repository."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.errors import NotFoundError, storage_errors
from me_api.models import WorkExperience
from me_api.schemas.experience import ExperienceCreate, ExperienceUpdate

logger = logging.getLogger(__name__)


@storage_errors("Failed to fetch work experience")
async def list_experience(db: AsyncSession) -> list[WorkExperience]:
    """List work experience, most recent start date first."""
    result = await db.execute(
        select(WorkExperience).order_by(
            WorkExperience.start_date.desc().nulls_last(),
            WorkExperience.id.desc(),
        )
    )
    return list(result.scalars().all())


@storage_errors("Failed to fetch work experience")
async def get_experience(db: AsyncSession, experience_id: int) -> WorkExperience:
    """Get a single work experience entry by ID."""
    experience = await db.get(WorkExperience, experience_id)
    if experience is None:
        raise NotFoundError(f"No work experience found with ID {experience_id}")
    return experience


@storage_errors("Failed to create work experience")
async def create_experience(db: AsyncSession, data: ExperienceCreate) -> WorkExperience:
    experience = WorkExperience(**data.model_dump())
    db.add(experience)
    await db.commit()
    await db.refresh(experience)

    logger.info(f"Created work experience {experience.id} ({experience.company})")
    return experience


@storage_errors("Failed to update work experience")
async def update_experience(
    db: AsyncSession,
    experience_id: int,
    data: ExperienceUpdate,
) -> WorkExperience:
    experience = await db.get(WorkExperience, experience_id)
    if experience is None:
        raise NotFoundError(f"No work experience found with ID {experience_id}")

    for field, value in data.model_dump().items():
        setattr(experience, field, value)

    await db.commit()
    await db.refresh(experience)

    logger.info(f"Updated work experience {experience_id}")
    return experience


@storage_errors("Failed to delete work experience")
async def delete_experience(db: AsyncSession, experience_id: int) -> None:
    experience = await db.get(WorkExperience, experience_id)
    if experience is None:
        raise NotFoundError(f"No work experience found with ID {experience_id}")

    await db.delete(experience)
    await db.commit()

    logger.info(f"Deleted work experience {experience_id}")
