"""
Domain errors and their HTTP translation

Services raise these; app.main registers the handlers below so every
error leaves the API with the same {"detail": ...} body FastAPI uses
for HTTPException.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors raised by the domain and service layers"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Referenced category, movie or user does not exist (or is inactive)"""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Uniqueness violation, from a pre-check or from a storage constraint"""

    status_code = status.HTTP_409_CONFLICT


class ValidationError(AppError):
    """Malformed input that would corrupt an entity or a query"""

    status_code = status.HTTP_400_BAD_REQUEST


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
