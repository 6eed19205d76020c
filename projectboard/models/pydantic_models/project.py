"""
Pydantic model for Project entity.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProjectModel(BaseModel):
    """
    Wire representation of a project, returned by every project endpoint and
    parsed back by the client.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str = ""
    created_at: datetime | None = None
