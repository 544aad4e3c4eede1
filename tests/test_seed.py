"""Tests for the schema bootstrap and seed scripts."""

from sqlalchemy import func, select

from me_api.init_db import initialize_database
from me_api.models import Profile, Project, ProjectSkill, Skill, WorkExperience
from me_api.repositories import projects as project_repository
from me_api.seed import (
    SEED_PROJECTS,
    SEED_SKILLS,
    clear_tables,
    project_skill_links,
    seed_database,
)

LINK_COUNT = sum(len(p["skills"]) for p in SEED_PROJECTS)


async def count_rows(database, model):
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def test_initialize_database_is_idempotent(database):
    first = await initialize_database(database)
    second = await initialize_database(database)

    assert first == second == ["profile", "project_skills", "projects", "skills", "work_experience"]


async def test_seed_loads_sample_data(database):
    counts = await seed_database(database)

    assert counts == {
        "profile": 1,
        "skills": 10,
        "projects": 4,
        "project_skills": LINK_COUNT,
        "work_experience": 3,
    }
    assert await count_rows(database, Profile) == 1
    assert await count_rows(database, Skill) == len(SEED_SKILLS)
    assert await count_rows(database, Project) == len(SEED_PROJECTS)
    assert await count_rows(database, WorkExperience) == 3
    assert await count_rows(database, ProjectSkill) == LINK_COUNT


async def test_seed_links_named_skills(database):
    await seed_database(database)

    async with database.session() as session:
        projects = await project_repository.list_projects(session, skill="TypeScript")

    assert sorted(p.title for p in projects) == ["Portfolio Website", "Task Management App"]


async def test_reseeding_clears_previous_rows(database):
    await seed_database(database)
    await seed_database(database)

    assert await count_rows(database, Profile) == 1
    assert await count_rows(database, Skill) == len(SEED_SKILLS)
    assert await count_rows(database, ProjectSkill) == LINK_COUNT


async def test_clear_tables_reports_removed_rows(database):
    await seed_database(database)

    removed = await clear_tables(database)

    assert removed == 1 + len(SEED_SKILLS) + len(SEED_PROJECTS) + LINK_COUNT + 3
    assert await count_rows(database, Skill) == 0
    assert await clear_tables(database) == 0


async def test_project_skill_links_lists_every_link(database):
    await seed_database(database)

    links = await project_skill_links(database)

    assert len(links) == LINK_COUNT
    assert ("Weather Dashboard", "JavaScript") in links
    assert links == sorted(links)
