"""
Error taxonomy for projectboard.

Every error carries the HTTP status it maps to; the global handlers in
``projectboard.api.error_handlers`` turn them into ``{"error": message}``
bodies. Store-layer details never reach the message.
"""

from fastapi import status


class ProjectBoardError(Exception):
    """Base class for all errors the API maps to a response."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(ProjectBoardError):
    """Malformed input: empty title, non-numeric id."""

    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidCredentials(ProjectBoardError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthorized(ProjectBoardError):
    """Missing, malformed, tampered or expired bearer token."""

    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(ProjectBoardError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class TransientStoreError(ProjectBoardError):
    """The relational store could not be reached or rejected the operation."""

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
