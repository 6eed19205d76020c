"""
ProjectRepository: every read and write of the ``projects`` table goes
through here.

Mutations commit before returning. Driver and connection failures are rolled
back, logged and re-raised as ``TransientStoreError`` so handlers never see
SQLAlchemy exceptions.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from projectboard.core.errors import NotFoundError, TransientStoreError, ValidationError
from projectboard.models.project import Project

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description")

# ids are signed 64-bit integers in every supported backend
MAX_PROJECT_ID = 2**63 - 1


def normalize_title(title: Any) -> str:
    if title is None or not str(title).strip():
        raise ValidationError("Title required")
    return str(title).strip()


def normalize_description(description: Any) -> str:
    return "" if description is None else str(description)


class ProjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _store_errors(self, operation: str):
        try:
            yield
        except (OperationalError, DBAPIError) as e:
            await self.db.rollback()
            logger.error(f"Store unavailable during {operation}: {e}")
            raise TransientStoreError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Store error during {operation}: {e}")
            raise TransientStoreError() from e

    async def list_projects(self) -> list[Project]:
        """All projects, newest first. Insertion order breaks timestamp ties."""
        async with self._store_errors("list"):
            result = await self.db.execute(
                select(Project).order_by(Project.created_at.desc(), Project.id.desc())
            )
            return list(result.scalars().all())

    async def get_project(self, project_id: int) -> Project:
        if not 1 <= project_id <= MAX_PROJECT_ID:
            raise NotFoundError()
        async with self._store_errors("get"):
            project = await self.db.get(Project, project_id)
        if project is None:
            raise NotFoundError()
        return project

    async def create_project(self, title: Any, description: Any = "") -> Project:
        project = Project(
            title=normalize_title(title),
            description=normalize_description(description),
        )
        async with self._store_errors("create"):
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
        return project

    async def update_project(self, project_id: int, fields: dict[str, Any]) -> Project:
        """Apply only the keys present in *fields*; absent keys are untouched."""
        changes: dict[str, str] = {}
        if "title" in fields:
            changes["title"] = normalize_title(fields["title"])
        if "description" in fields:
            changes["description"] = normalize_description(fields["description"])

        project = await self.get_project(project_id)
        async with self._store_errors("update"):
            for key, value in changes.items():
                setattr(project, key, value)
            await self.db.commit()
            await self.db.refresh(project)
        return project

    async def delete_project(self, project_id: int) -> Project:
        """Delete and return the removed record."""
        project = await self.get_project(project_id)
        async with self._store_errors("delete"):
            await self.db.delete(project)
            await self.db.commit()
        return project

    async def count_projects(self) -> int:
        async with self._store_errors("count"):
            result = await self.db.execute(select(func.count()).select_from(Project))
            return result.scalar_one()

    async def create_many(self, rows: list[dict[str, str]]) -> list[Project]:
        projects = [
            Project(
                title=normalize_title(row.get("title")),
                description=normalize_description(row.get("description")),
            )
            for row in rows
        ]
        async with self._store_errors("create_many"):
            for project in projects:
                self.db.add(project)
                # flush one by one so ids follow list order
                await self.db.flush()
            await self.db.commit()
        return projects

    async def health_check(self) -> bool:
        """Trivial liveness probe against the store."""
        try:
            await self.db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
