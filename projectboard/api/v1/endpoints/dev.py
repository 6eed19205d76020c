"""
Development-only helpers. Mounted by ``create_app`` only when
``ENVIRONMENT=development``.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from projectboard.api.v1.helpers.responses import error_response
from projectboard.bootstrap import ensure_demo_projects
from projectboard.db.projects import ProjectRepository
from projectboard.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dev", tags=["dev"])


@router.post("/seed")
async def seed(db: AsyncSession = Depends(get_db)):
    """Insert the demo records if the store is empty; a no-op otherwise."""
    try:
        await ensure_demo_projects(ProjectRepository(db))
    except Exception as e:
        logger.error(f"Seed failed: {e}", exc_info=True)
        return error_response("Seed failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"seeded": True}
