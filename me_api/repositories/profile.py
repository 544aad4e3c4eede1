"""Profile repository.

The profile is a singleton: it can be created once, then only updated.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.errors import ConflictError, NotFoundError, storage_errors
from me_api.models import Profile
from me_api.models.profile import PROFILE_ID
from me_api.schemas.profile import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)

PROFILE_EXISTS_MESSAGE = "A profile already exists. Use PUT to update instead."


async def _find_profile(db: AsyncSession) -> Profile | None:
    result = await db.execute(select(Profile).order_by(Profile.id).limit(1))
    return result.scalar_one_or_none()


@storage_errors("Failed to fetch profile information")
async def get_profile(db: AsyncSession) -> Profile:
    """Return the profile.

    Raises:
        NotFoundError: If no profile has been created yet
    """
    profile = await _find_profile(db)
    if profile is None:
        raise NotFoundError("No profile data available. Please create a profile first.")
    return profile


@storage_errors("Failed to create profile")
async def create_profile(db: AsyncSession, data: ProfileCreate) -> Profile:
    """Create the profile.

    Raises:
        ConflictError: If a profile already exists
    """
    if await _find_profile(db) is not None:
        raise ConflictError(PROFILE_EXISTS_MESSAGE)

    profile = Profile(id=PROFILE_ID, **data.model_dump())
    db.add(profile)
    try:
        await db.commit()
    except IntegrityError as e:
        # Another request inserted the singleton row first
        await db.rollback()
        raise ConflictError(PROFILE_EXISTS_MESSAGE) from e
    await db.refresh(profile)

    logger.info(f"Created profile {profile.id}")
    return profile


@storage_errors("Failed to update profile")
async def update_profile(db: AsyncSession, data: ProfileUpdate) -> Profile:
    """Replace every profile field with the values in ``data``.

    Raises:
        NotFoundError: If no profile exists yet
    """
    profile = await _find_profile(db)
    if profile is None:
        raise NotFoundError("No profile exists to update. Create one first with POST.")

    for field, value in data.model_dump().items():
        setattr(profile, field, value)

    await db.commit()
    await db.refresh(profile)

    logger.info(f"Updated profile {profile.id}")
    return profile
