"""Cross-entity search over profile, skills, projects and work experience.

Each source is queried with its own round-trip, matched on a fixed set of text
columns (case-insensitive substring), and projected into a ``SearchResult``.
The global search ranks the merged list; the advanced search filters by source
and caps the list in source order.
"""

import logging
import math

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from me_api.errors import ValidationError, storage_errors
from me_api.models import Profile, Project, Skill, WorkExperience
from me_api.schemas.search import AdvancedSearchResponse, SearchResponse, SearchResult
from me_api.utils.sql import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("profile", "skill", "project", "work")
MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 20

PROFICIENCY_LABELS = {
    5: "Expert level",
    4: "Advanced level",
    3: "Intermediate level",
    2: "Beginner level",
}


def proficiency_label(level: int | None) -> str:
    """Human-readable tier for a 1-5 proficiency rating."""
    return PROFICIENCY_LABELS.get(level, "Basic level")


def validate_query(query: str | None) -> str:
    """Return the trimmed query.

    Raises:
        ValidationError: If the query is missing or shorter than 2 characters
            once surrounding whitespace is removed
    """
    if query is None or len(query.strip()) < MIN_QUERY_LENGTH:
        raise ValidationError(
            f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
        )
    return query.strip()


def validate_type(search_type: str | None) -> str | None:
    """Check an optional source filter against ``SEARCH_TYPES``."""
    if search_type is not None and search_type not in SEARCH_TYPES:
        raise ValidationError(f"Type must be one of: {', '.join(SEARCH_TYPES)}")
    return search_type


def _matches_any(pattern: str, *columns):
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


async def search_profile(db: AsyncSession, query: str) -> list[SearchResult]:
    pattern = contains_pattern(query)
    result = await db.execute(
        select(Profile)
        .where(_matches_any(pattern, Profile.name, Profile.email, Profile.education))
        .order_by(Profile.id)
    )
    return [
        SearchResult(
            type="profile",
            title=profile.name,
            description=profile.email,
            category="Profile Information",
            id=profile.id,
        )
        for profile in result.scalars().all()
    ]


async def search_skills(
    db: AsyncSession,
    query: str,
    category: str | None = None,
) -> list[SearchResult]:
    """Match skills on name or category.

    Args:
        db: Database session
        query: Trimmed search text
        category: When given, only skills in exactly this category match
    """
    pattern = contains_pattern(query)
    statement = select(Skill).where(_matches_any(pattern, Skill.name, Skill.category))
    if category:
        statement = statement.where(Skill.category == category)

    result = await db.execute(statement.order_by(Skill.id))
    return [
        SearchResult(
            type="skill",
            title=skill.name,
            description=proficiency_label(skill.proficiency),
            category=skill.category,
            id=skill.id,
        )
        for skill in result.scalars().all()
    ]


async def search_projects(db: AsyncSession, query: str) -> list[SearchResult]:
    pattern = contains_pattern(query)
    result = await db.execute(
        select(Project.id, Project.title, Project.description)
        .where(_matches_any(pattern, Project.title, Project.description))
        .order_by(Project.id)
    )
    return [
        SearchResult(
            type="project",
            title=title,
            description=description,
            category="Project",
            id=project_id,
        )
        for project_id, title, description in result.all()
    ]


async def search_work(db: AsyncSession, query: str) -> list[SearchResult]:
    pattern = contains_pattern(query)
    result = await db.execute(
        select(WorkExperience)
        .where(
            _matches_any(
                pattern,
                WorkExperience.company,
                WorkExperience.position,
                WorkExperience.description,
            )
        )
        .order_by(WorkExperience.id)
    )
    return [
        SearchResult(
            type="work",
            title=work.position,
            description=f"{work.company} - {work.description or ''}",
            category="Work Experience",
            id=work.id,
        )
        for work in result.scalars().all()
    ]


def rank_results(results: list[SearchResult], query: str) -> list[SearchResult]:
    """Order results by relevance to ``query``.

    Exact (case-insensitive) title matches come first. The rest follow by the
    position of the query inside the lowercased title, earliest first; titles
    that do not contain the query at all come last. The sort is stable, so
    equal results keep their source order.

    Note: this deliberately differs from sorting on raw ``str.find`` values,
    where a miss (-1) would sort ahead of every other non-exact match.
    """
    needle = query.lower()

    def relevance(result: SearchResult) -> tuple[bool, float]:
        title = result.title.lower()
        position = title.find(needle)
        return (title != needle, position if position >= 0 else math.inf)

    return sorted(results, key=relevance)


@storage_errors("Failed to perform search")
async def search(db: AsyncSession, query: str | None) -> SearchResponse:
    """Search every source and rank the merged results.

    Args:
        db: Database session
        query: Raw search text; must be at least 2 characters once trimmed

    Returns:
        SearchResponse with results ordered by ``rank_results``

    Raises:
        ValidationError: If the query is too short
        InternalError: If any source query fails
    """
    term = validate_query(query)

    results = [
        *await search_profile(db, term),
        *await search_skills(db, term),
        *await search_projects(db, term),
        *await search_work(db, term),
    ]
    ranked = rank_results(results, term)

    logger.info(f"Search for '{term}' returned {len(ranked)} results")
    return SearchResponse(query=term, count=len(ranked), data=ranked)


@storage_errors("Failed to perform advanced search")
async def advanced_search(
    db: AsyncSession,
    query: str | None,
    search_type: str | None = None,
    category: str | None = None,
    limit: int = DEFAULT_LIMIT,
) -> AdvancedSearchResponse:
    """Search one source (or all) and cap the number of results.

    Results keep source order (profile, skill, project, work) and are not
    ranked before the limit is applied.

    Args:
        db: Database session
        query: Raw search text; must be at least 2 characters once trimmed
        search_type: One of ``SEARCH_TYPES``; None searches every source
        category: Exact skill category; only applied when ``search_type`` is
            ``"skill"``
        limit: Maximum number of results (>= 1)

    Raises:
        ValidationError: On a short query, unknown type or non-positive limit
        InternalError: If any source query fails
    """
    term = validate_query(query)
    validate_type(search_type)
    if limit < 1:
        raise ValidationError("Limit must be a positive integer")

    results: list[SearchResult] = []

    if search_type in (None, "profile"):
        results.extend(await search_profile(db, term))

    if search_type in (None, "skill"):
        skill_category = category if search_type == "skill" else None
        results.extend(await search_skills(db, term, skill_category))

    if search_type in (None, "project"):
        results.extend(await search_projects(db, term))

    if search_type in (None, "work"):
        results.extend(await search_work(db, term))

    results = results[:limit]

    logger.info(
        f"Advanced search for '{term}' (type={search_type or 'all'}, "
        f"category={category or 'all'}) returned {len(results)} results"
    )
    return AdvancedSearchResponse(
        query=term,
        type=search_type or "all",
        category=category or "all",
        count=len(results),
        data=results,
    )
