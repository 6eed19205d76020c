"""
Router assembly for the ``/api`` prefix.

Public and bearer-protected routes share one router; protection is declared
per endpoint. The dev router is exported separately so the app factory can
decide whether to mount it.
"""

from fastapi import APIRouter

from projectboard.api.v1.endpoints import auth, dev, projects

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(projects.router)

dev_router = APIRouter()
dev_router.include_router(dev.router)
