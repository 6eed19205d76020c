"""
Response helpers for the ``{"error": message}`` envelope used by every
failing endpoint.
"""

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


def error_response(
    message: str = "Server error",
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )
