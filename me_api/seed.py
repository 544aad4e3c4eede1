"""Populate the database with sample portfolio data.

Usage:
    me-api-seed              # clear all tables, then load the sample data
    me-api-seed --no-clear   # load on top of existing rows
"""

import argparse
import asyncio
import logging
from datetime import date

from sqlalchemy import delete, func, select

from me_api.config import settings
from me_api.database import Database
from me_api.logging_config import setup_logging
from me_api.models import Profile, Project, ProjectSkill, Skill, WorkExperience
from me_api.repositories import experience as experience_repository
from me_api.repositories import profile as profile_repository
from me_api.repositories import projects as project_repository
from me_api.repositories import skills as skill_repository
from me_api.schemas.experience import ExperienceCreate
from me_api.schemas.profile import ProfileCreate
from me_api.schemas.project import ProjectCreate
from me_api.schemas.skill import SkillCreate

logger = logging.getLogger(__name__)

SEED_PROFILE = {
    "name": "John Doe",
    "email": "john.doe@example.com",
    "education": "Bachelor of Science in Computer Science, University of Technology",
    "github": "https://github.com/johndoe",
    "linkedin": "https://linkedin.com/in/johndoe",
    "portfolio": "https://johndoe.dev",
}

SEED_SKILLS = [
    {"name": "JavaScript", "proficiency": 5, "category": "Frontend"},
    {"name": "Python", "proficiency": 4, "category": "Backend"},
    {"name": "React", "proficiency": 5, "category": "Frontend"},
    {"name": "Node.js", "proficiency": 4, "category": "Backend"},
    {"name": "SQL", "proficiency": 4, "category": "Database"},
    {"name": "MongoDB", "proficiency": 3, "category": "Database"},
    {"name": "Docker", "proficiency": 3, "category": "DevOps"},
    {"name": "Git", "proficiency": 5, "category": "Tools"},
    {"name": "TypeScript", "proficiency": 4, "category": "Frontend"},
    {"name": "Express.js", "proficiency": 4, "category": "Backend"},
]

SEED_PROJECTS = [
    {
        "title": "E-Commerce Platform",
        "description": (
            "A full-stack e-commerce application built with React, Node.js, and MongoDB. "
            "Features include user authentication, product management, shopping cart, "
            "and payment integration."
        ),
        "github_link": "https://github.com/johndoe/ecommerce-platform",
        "live_link": "https://ecommerce-demo.johndoe.dev",
        "skills": ["React", "Node.js", "MongoDB", "JavaScript"],
    },
    {
        "title": "Task Management App",
        "description": (
            "A collaborative task management application with real-time updates, "
            "drag-and-drop functionality, and team collaboration features."
        ),
        "github_link": "https://github.com/johndoe/task-manager",
        "live_link": "https://tasks.johndoe.dev",
        "skills": ["React", "TypeScript", "Express.js"],
    },
    {
        "title": "Weather Dashboard",
        "description": (
            "A weather application that displays current weather conditions and forecasts "
            "using OpenWeatherMap API with beautiful visualizations."
        ),
        "github_link": "https://github.com/johndoe/weather-dashboard",
        "live_link": "https://weather.johndoe.dev",
        "skills": ["JavaScript", "React"],
    },
    {
        "title": "Portfolio Website",
        "description": (
            "A responsive portfolio website built with modern web technologies "
            "showcasing projects and skills."
        ),
        "github_link": "https://github.com/johndoe/portfolio",
        "live_link": "https://johndoe.dev",
        "skills": ["JavaScript", "TypeScript", "Git"],
    },
]

SEED_WORK_EXPERIENCE = [
    {
        "company": "Tech Solutions Inc.",
        "position": "Senior Full Stack Developer",
        "description": (
            "Led development of multiple web applications, mentored junior developers, "
            "and implemented best practices for code quality and testing."
        ),
        "start_date": date(2022, 1, 1),
        "end_date": None,
        "current": True,
    },
    {
        "company": "Digital Innovations Ltd.",
        "position": "Frontend Developer",
        "description": (
            "Developed responsive user interfaces using React and modern CSS frameworks, "
            "collaborated with design team to implement pixel-perfect designs."
        ),
        "start_date": date(2020, 6, 1),
        "end_date": date(2021, 12, 31),
        "current": False,
    },
    {
        "company": "StartupXYZ",
        "position": "Junior Developer",
        "description": (
            "Built and maintained various web applications, learned modern development "
            "practices and technologies."
        ),
        "start_date": date(2019, 1, 1),
        "end_date": date(2020, 5, 31),
        "current": False,
    },
]


SEEDED_MODELS = (Profile, Skill, Project, ProjectSkill, WorkExperience)


async def clear_tables(database: Database) -> int:
    """Delete every row, children before parents.

    Returns:
        Total number of rows removed
    """
    removed = 0
    for model in (ProjectSkill, Project, Skill, WorkExperience, Profile):
        removed += await database.execute(delete(model))
    return removed


async def table_counts(database: Database) -> dict[str, int]:
    """Row count per seeded table, keyed by table name."""
    counts = {}
    for model in SEEDED_MODELS:
        row = await database.fetch_one(select(func.count()).select_from(model))
        counts[model.__tablename__] = row[0]
    return counts


async def project_skill_links(database: Database) -> list[tuple[str, str]]:
    """(project title, skill name) for every stored link, sorted."""
    rows = await database.fetch_all(
        select(Project.title, Skill.name)
        .join(ProjectSkill, ProjectSkill.project_id == Project.id)
        .join(Skill, Skill.id == ProjectSkill.skill_id)
        .order_by(Project.title, Skill.name)
    )
    return [(title, name) for title, name in rows]


async def seed_database(database: Database, clear: bool = True) -> dict[str, int]:
    """Load the sample profile, skills, projects and work experience.

    Each row is committed by its repository function.

    Args:
        database: Storage client (schema is created if missing)
        clear: Delete existing rows from every table first

    Returns:
        Row count per table after seeding
    """
    await database.init()

    if clear:
        removed = await clear_tables(database)
        logger.info(f"Existing data cleared ({removed} rows)")

    async with database.session() as db:
        await profile_repository.create_profile(db, ProfileCreate(**SEED_PROFILE))
        logger.info("Profile seeded successfully")

        for skill in SEED_SKILLS:
            await skill_repository.create_skill(db, SkillCreate(**skill))
        logger.info("Skills seeded successfully")

        for project in SEED_PROJECTS:
            await project_repository.create_project(db, ProjectCreate(**project))
        logger.info("Projects seeded successfully")

        for work in SEED_WORK_EXPERIENCE:
            await experience_repository.create_experience(db, ExperienceCreate(**work))
        logger.info("Work experience seeded successfully")

    return await table_counts(database)


async def _run(clear: bool) -> None:
    database = Database.from_settings(settings)
    try:
        counts = await seed_database(database, clear=clear)
        for title, skill in await project_skill_links(database):
            logger.debug(f"{title} -> {skill}")
        logger.info("Database seeding completed successfully", extra={"counts": counts})
    finally:
        await database.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the portfolio database with sample data.")
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="keep existing rows instead of clearing every table first",
    )
    args = parser.parse_args()

    setup_logging(level=settings.log_level, json_format=settings.log_json, log_dir=settings.log_dir)
    asyncio.run(_run(clear=not args.no_clear))


if __name__ == "__main__":
    main()
