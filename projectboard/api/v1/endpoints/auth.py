"""
Demo login.

No signup, no password change: the only identity is the configured demo
pair, and the response carries nothing but the bearer token.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from projectboard.api.v1.helpers.authentication import (
    authenticate_demo_user,
    create_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """Exchange the demo email + password for a JWT."""
    subject = authenticate_demo_user(request.email, request.password)
    logger.info(f"Issued access token for {subject}")
    return LoginResponse(token=create_access_token(subject))
