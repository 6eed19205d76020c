"""Tests for the first-run seed logic and the development seed endpoint."""

from projectboard.bootstrap import DEMO_PROJECTS, ensure_demo_projects
from projectboard.db.projects import ProjectRepository


async def test_bootstrap_seeds_empty_store(db_session):
    repository = ProjectRepository(db_session)

    assert await ensure_demo_projects(repository) is True

    projects = await repository.list_projects()
    assert len(projects) == 2
    assert {p.title for p in projects} == {"Ukázkový projekt", "Programování"}


async def test_bootstrap_is_idempotent(db_session):
    repository = ProjectRepository(db_session)

    await ensure_demo_projects(repository)
    assert await ensure_demo_projects(repository) is False
    assert await repository.count_projects() == len(DEMO_PROJECTS)


async def test_bootstrap_skips_non_empty_store(db_session, project_factory):
    await project_factory("Existing")

    assert await ensure_demo_projects(ProjectRepository(db_session)) is False
    assert await ProjectRepository(db_session).count_projects() == 1


async def test_dev_seed_route_hidden_outside_development(test_client):
    resp = await test_client.post("/api/dev/seed")
    assert resp.status_code == 404


async def test_dev_seed_route_in_development(dev_client, db_session):
    first = await dev_client.post("/api/dev/seed")
    second = await dev_client.post("/api/dev/seed")

    assert first.status_code == 200
    assert first.json() == {"seeded": True}
    assert second.json() == {"seeded": True}
    assert await ProjectRepository(db_session).count_projects() == 2


async def test_dev_seed_failure_returns_500(dev_client, monkeypatch):
    async def _broken(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(ProjectRepository, "count_projects", _broken)

    resp = await dev_client.post("/api/dev/seed")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Seed failed"}
