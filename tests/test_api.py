"""HTTP-level tests for status codes and response envelopes."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from main import create_app
from me_api.database import Database

PROFILE = {
    "name": "John Doe",
    "email": "john.doe@example.com",
    "education": "BSc Computer Science",
    "github": "https://github.com/johndoe",
}


async def create_skill(client, name, proficiency=4, category=None):
    response = await client.post(
        "/api/skills",
        json={"name": name, "proficiency": proficiency, "category": category},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestHealth:
    """Tests for service endpoints."""

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"
        assert body["database"] == "connected"
        assert body["uptime"] >= 0
        assert "timestamp" in body

    async def test_favicon(self, client):
        response = await client.get("/favicon.ico")
        assert response.status_code == 204

    async def test_unknown_route_lists_endpoints(self, client):
        response = await client.get("/api/unknown")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["path"] == "/api/unknown"
        assert "GET /api/search?q=:query" in body["available_endpoints"]


class TestProfileApi:
    """Tests for /api/profile."""

    async def test_get_before_create(self, client):
        response = await client.get("/api/profile")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_create_get_update(self, client):
        created = await client.post("/api/profile", json=PROFILE)
        assert created.status_code == 201
        assert created.json()["success"] is True
        assert created.json()["data"]["email"] == PROFILE["email"]

        fetched = await client.get("/api/profile")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["name"] == "John Doe"

        updated = await client.put("/api/profile", json={**PROFILE, "name": "Johnny Doe"})
        assert updated.status_code == 200
        assert updated.json()["message"] == "Profile updated successfully"
        assert updated.json()["data"]["name"] == "Johnny Doe"

    async def test_second_create_conflicts(self, client):
        await client.post("/api/profile", json=PROFILE)

        response = await client.post("/api/profile", json=PROFILE)

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    async def test_update_without_profile(self, client):
        response = await client.put("/api/profile", json=PROFILE)
        assert response.status_code == 404

    @pytest.mark.parametrize("payload", [{"name": "John"}, {"email": "j@example.com"}, {"name": "", "email": "j@example.com"}])
    async def test_missing_fields(self, client, payload):
        response = await client.post("/api/profile", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"]


class TestSkillsApi:
    """Tests for /api/skills."""

    @pytest.mark.parametrize("proficiency", [0, 6, -3])
    async def test_create_rejects_out_of_range_proficiency(self, client, proficiency):
        response = await client.post("/api/skills", json={"name": "Go", "proficiency": proficiency})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.parametrize("proficiency", [0, 6])
    async def test_update_rejects_out_of_range_proficiency(self, client, proficiency):
        skill = await create_skill(client, "Go")

        response = await client.put(
            f"/api/skills/{skill['id']}", json={"name": "Go", "proficiency": proficiency}
        )

        assert response.status_code == 400

    async def test_crud(self, client):
        skill = await create_skill(client, "Python", 4, "Backend")

        fetched = await client.get(f"/api/skills/{skill['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["category"] == "Backend"

        updated = await client.put(
            f"/api/skills/{skill['id']}", json={"name": "Python", "proficiency": 5}
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["proficiency"] == 5
        assert updated.json()["data"]["category"] is None

        deleted = await client.delete(f"/api/skills/{skill['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Skill deleted successfully"}

        missing = await client.get(f"/api/skills/{skill['id']}")
        assert missing.status_code == 404

    async def test_duplicate_name(self, client):
        await create_skill(client, "Python")

        response = await client.post("/api/skills", json={"name": "Python", "proficiency": 3})

        assert response.status_code == 409

    async def test_failed_commit_is_reported_as_error(self, client, monkeypatch):
        async def failing_commit(session):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = await client.post("/api/skills", json={"name": "Rust", "proficiency": 3})
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json() == {"error": "internal_error", "message": "Failed to create skill"}
        assert (await client.get("/api/skills")).json()["count"] == 0

    async def test_missing_ids(self, client):
        assert (await client.get("/api/skills/999")).status_code == 404
        assert (await client.put("/api/skills/999", json={"name": "Go", "proficiency": 3})).status_code == 404
        assert (await client.delete("/api/skills/999")).status_code == 404

    async def test_non_numeric_id(self, client):
        response = await client.get("/api/skills/abc")
        assert response.status_code == 400

    async def test_listings(self, client):
        await create_skill(client, "React", 5, "Frontend")
        await create_skill(client, "TypeScript", 4, "Frontend")
        await create_skill(client, "MongoDB", 3, "Database")

        listing = (await client.get("/api/skills")).json()
        assert listing["count"] == 3
        assert [s["name"] for s in listing["data"]] == ["React", "TypeScript", "MongoDB"]

        top = (await client.get("/api/skills/top", params={"limit": 1})).json()
        assert [s["name"] for s in top["data"]] == ["React"]

        categories = (await client.get("/api/skills/categories")).json()
        assert categories["data"][0] == {"category": "Frontend", "skill_count": 2}


class TestProjectsApi:
    """Tests for /api/projects."""

    async def test_unknown_skills_dropped(self, client):
        await create_skill(client, "JavaScript")

        created = await client.post(
            "/api/projects",
            json={
                "title": "Portfolio",
                "description": "Personal site",
                "skills": ["JavaScript", "Nonexistent"],
            },
        )
        assert created.status_code == 201
        project_id = created.json()["data"]["id"]

        fetched = await client.get(f"/api/projects/{project_id}")
        assert fetched.json()["data"]["skills"] == ["JavaScript"]

    async def test_deleting_skill_keeps_project(self, client):
        react = await create_skill(client, "React")
        await create_skill(client, "Node.js")
        created = await client.post(
            "/api/projects",
            json={"title": "Shop", "description": "Storefront", "skills": ["React", "Node.js"]},
        )
        project_id = created.json()["data"]["id"]

        await client.delete(f"/api/skills/{react['id']}")

        fetched = await client.get(f"/api/projects/{project_id}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["skills"] == ["Node.js"]

    async def test_update_and_filter(self, client):
        await create_skill(client, "React")
        await create_skill(client, "Python")
        created = await client.post(
            "/api/projects", json={"title": "Shop", "description": "Storefront", "skills": ["React"]}
        )
        project_id = created.json()["data"]["id"]

        updated = await client.put(
            f"/api/projects/{project_id}",
            json={"title": "Shop", "description": "Storefront", "skills": ["Python"]},
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["skills"] == ["Python"]

        by_python = (await client.get("/api/projects", params={"skill": "pyth"})).json()
        assert [p["id"] for p in by_python["data"]] == [project_id]
        by_react = (await client.get("/api/projects", params={"skill": "react"})).json()
        assert by_react["count"] == 0

    async def test_validation_and_missing(self, client):
        response = await client.post("/api/projects", json={"title": "No description"})
        assert response.status_code == 400

        response = await client.put("/api/projects/5", json={"title": "x", "description": "y"})
        assert response.status_code == 404

        response = await client.delete("/api/projects/5")
        assert response.status_code == 404


class TestExperienceApi:
    """Tests for /api/experience."""

    async def test_crud(self, client):
        created = await client.post(
            "/api/experience",
            json={"company": "Acme", "position": "Engineer", "start_date": "2022-01-01", "current": True},
        )
        assert created.status_code == 201
        experience_id = created.json()["data"]["id"]

        listing = (await client.get("/api/experience")).json()
        assert listing["count"] == 1

        updated = await client.put(
            f"/api/experience/{experience_id}",
            json={"company": "Acme", "position": "Lead", "start_date": "2022-01-01", "end_date": "2024-06-30"},
        )
        assert updated.json()["data"]["end_date"] == "2024-06-30"
        assert updated.json()["data"]["current"] is False

        assert (await client.delete(f"/api/experience/{experience_id}")).status_code == 200
        assert (await client.get(f"/api/experience/{experience_id}")).status_code == 404

    async def test_current_with_end_date_rejected(self, client):
        response = await client.post(
            "/api/experience",
            json={"company": "Acme", "position": "Engineer", "end_date": "2024-01-01", "current": True},
        )
        assert response.status_code == 400


class TestSearchApi:
    """Tests for /api/search."""

    async def test_query_length_boundary(self, client):
        short = await client.get("/api/search", params={"q": "a"})
        assert short.status_code == 400
        assert short.json()["error"] == "validation_error"

        ok = await client.get("/api/search", params={"q": "ab"})
        assert ok.status_code == 200
        assert ok.json() == {"success": True, "count": 0, "data": [], "query": "ab"}

    async def test_missing_query(self, client):
        response = await client.get("/api/search")
        assert response.status_code == 400

    async def test_ranked_results(self, client):
        await create_skill(client, "React Native", 3)
        await create_skill(client, "React", 5)

        body = (await client.get("/api/search", params={"q": "React"})).json()

        assert [r["title"] for r in body["data"]] == ["React", "React Native"]
        assert body["data"][0] == {
            "type": "skill",
            "title": "React",
            "description": "Expert level",
            "category": None,
            "id": body["data"][0]["id"],
        }

    async def test_advanced(self, client):
        await create_skill(client, "React", 5, "Frontend")
        await create_skill(client, "React Native", 3, "Mobile")

        body = (
            await client.get(
                "/api/search/advanced",
                params={"q": "react", "type": "skill", "category": "Mobile"},
            )
        ).json()

        assert body["type"] == "skill"
        assert body["category"] == "Mobile"
        assert [r["title"] for r in body["data"]] == ["React Native"]

    async def test_advanced_invalid_type(self, client):
        response = await client.get("/api/search/advanced", params={"q": "react", "type": "blog"})

        assert response.status_code == 400
        assert "Type must be one of" in response.json()["message"]

    async def test_advanced_invalid_limit(self, client):
        response = await client.get("/api/search/advanced", params={"q": "react", "limit": 0})
        assert response.status_code == 400

    async def test_storage_fault_returns_internal_error(self, settings):
        # Tables are never created, so every query fails
        app = create_app(settings, Database("sqlite+aiosqlite://"))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/search", params={"q": "react"})

        assert response.status_code == 500
        assert response.json() == {"error": "internal_error", "message": "Failed to perform search"}


class TestRateLimiting:
    """Tests for the per-client request limit."""

    async def test_limit_covers_api_routes(self, settings, database):
        limited = settings.model_copy(update={"rate_limit_enabled": True, "rate_limit_max_requests": 2})
        app = create_app(limited, database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            statuses = [(await client.get("/api/skills")).status_code for _ in range(3)]
            other_route = await client.get("/api/projects")

        assert statuses == [200, 200, 429]
        assert other_route.status_code == 429
        assert other_route.json() == {
            "error": "rate_limit_exceeded",
            "message": "Too many requests from this IP, please try again later.",
        }

    async def test_disabled_limit_never_blocks(self, client):
        for _ in range(5):
            assert (await client.get("/api/skills")).status_code == 200
