"""
First-run bootstrap – insert the two demo projects when the store is empty.

Runs once at startup before traffic is accepted, and again on demand through
``POST /api/dev/seed`` in development. The zero-count check makes repeated
calls a no-op once any data exists.
"""

import logging

from projectboard.db.projects import ProjectRepository

logger = logging.getLogger(__name__)

DEMO_PROJECTS = [
    {"title": "Ukázkový projekt", "description": "Popis..."},
    {"title": "Programování", "description": "Práce s CoPilotem"},
]


async def ensure_demo_projects(repository: ProjectRepository) -> bool:
    """Seed the demo records on an empty store. Returns True if it inserted."""
    if await repository.count_projects() > 0:
        return False  # already has data

    await repository.create_many(DEMO_PROJECTS)
    logger.info("Seeded %d demo projects", len(DEMO_PROJECTS))
    return True
