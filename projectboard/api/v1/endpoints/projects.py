"""
Project CRUD.

Listing and single-record reads are public. Create, update and delete need a
bearer token; the token dependency resolves before the store is touched, so a
rejected request never mutates anything.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from projectboard.api.v1.helpers.authentication import get_current_subject
from projectboard.core.errors import ValidationError
from projectboard.db.projects import ProjectRepository
from projectboard.db.session import get_db
from projectboard.models.pydantic_models.project import ProjectModel

router = APIRouter(prefix="/projects", tags=["projects"])


# ── request schemas ───────────────────────────────────────────────────────


class CreateProjectRequest(BaseModel):
    # optional here so a missing title is a 400 from the repository, not a 422
    title: str | None = None
    description: str | None = None


class UpdateProjectRequest(BaseModel):
    title: str | None = None
    description: str | None = None


# ── helpers ───────────────────────────────────────────────────────────────


def parse_project_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Invalid id")


# ── endpoints ─────────────────────────────────────────────────────────────


@router.get("", response_model=list[ProjectModel])
async def list_projects(db: AsyncSession = Depends(get_db)):
    projects = await ProjectRepository(db).list_projects()
    return [ProjectModel.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectModel)
async def get_project(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await ProjectRepository(db).get_project(parse_project_id(project_id))
    return ProjectModel.model_validate(project)


@router.post("", response_model=ProjectModel, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: CreateProjectRequest,
    subject: str = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    project = await ProjectRepository(db).create_project(data.title, data.description)
    return ProjectModel.model_validate(project)


@router.put("/{project_id}", response_model=ProjectModel)
async def update_project(
    project_id: str,
    data: UpdateProjectRequest | None = None,
    subject: str = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    target_id = parse_project_id(project_id)
    # no body is an empty partial update
    fields = data.model_dump(exclude_unset=True) if data is not None else {}
    project = await ProjectRepository(db).update_project(target_id, fields)
    return ProjectModel.model_validate(project)


@router.delete("/{project_id}", response_model=ProjectModel)
async def delete_project(
    project_id: str,
    subject: str = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    project = await ProjectRepository(db).delete_project(parse_project_id(project_id))
    return ProjectModel.model_validate(project)
