"""
Demo-credential authentication.

There is no user table: login succeeds only for the configured demo pair and
yields an HS256 JWT whose ``sub`` is the demo email. Any valid, unexpired
token grants full mutation rights.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from projectboard.config import settings
from projectboard.core.errors import InvalidCredentials, Unauthorized

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate_demo_user(email: str | None, password: str | None) -> str:
    """Return the authenticated subject or raise ``InvalidCredentials``."""
    if email is None or password is None:
        raise InvalidCredentials()
    email_ok = secrets.compare_digest(email.encode("utf-8"), settings.demo_email.encode("utf-8"))
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.demo_password.encode("utf-8")
    )
    if not (email_ok and password_ok):
        raise InvalidCredentials()
    return settings.demo_email


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({"sub": subject, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def verify_access_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise Unauthorized()

    subject = payload.get("sub")
    if not subject:
        raise Unauthorized()
    return subject


async def get_current_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Dependency for mutating routes; runs before the store is touched."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return verify_access_token(credentials.credentials)
