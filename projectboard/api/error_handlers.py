"""Global exception handlers.

ProjectBoardError subclasses map to their own status; request-body validation
failures are 400; anything else is logged and returned as a generic 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from projectboard.api.v1.helpers.responses import error_response
from projectboard.core.errors import ProjectBoardError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ProjectBoardError)
    async def project_board_error_handler(request: Request, exc: ProjectBoardError):
        if exc.http_status >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return error_response(exc.message, exc.http_status)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        # never leak internal details
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return error_response("Server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
