"""Error taxonomy and FastAPI exception handlers.

Every error response has the shape ``{"error": <stable tag>, "message": ...}``.
Route handlers and repositories raise the exceptions below; the handlers
registered by :func:`register_error_handlers` turn them into responses.

Usage:
    from me_api.errors import NotFoundError

    if not skill:
        raise NotFoundError(f"No skill found with ID {skill_id}")
"""

import logging
from functools import wraps

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from me_api.config import Settings

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api/profile",
    "POST /api/profile",
    "PUT /api/profile",
    "GET /api/skills",
    "GET /api/skills/top",
    "GET /api/skills/categories",
    "GET /api/skills/:id",
    "POST /api/skills",
    "PUT /api/skills/:id",
    "DELETE /api/skills/:id",
    "GET /api/projects",
    "GET /api/projects?skill=:skill",
    "GET /api/projects/:id",
    "POST /api/projects",
    "PUT /api/projects/:id",
    "DELETE /api/projects/:id",
    "GET /api/experience",
    "GET /api/experience/:id",
    "POST /api/experience",
    "PUT /api/experience/:id",
    "DELETE /api/experience/:id",
    "GET /api/search?q=:query",
    "GET /api/search/advanced?q=:query&type=:type&category=:category&limit=:limit",
]


class AppError(Exception):
    """Base exception for API errors."""

    status_code = 500
    error_type = "internal_error"
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> dict:
        return {"error": self.error_type, "message": self.message}


class ValidationError(AppError):
    """Missing or out-of-range input."""

    status_code = 400
    error_type = "validation_error"
    message = "Invalid input"


class NotFoundError(AppError):
    """Requested singleton or id does not exist."""

    status_code = 404
    error_type = "not_found"
    message = "Resource not found"


class ConflictError(AppError):
    """Duplicate value for a unique field."""

    status_code = 409
    error_type = "conflict"
    message = "Resource already exists"


class RateLimitError(AppError):
    """Client sent more requests than the configured window allows."""

    status_code = 429
    error_type = "rate_limit_exceeded"
    message = "Too many requests from this IP, please try again later."


class InternalError(AppError):
    """Storage fault or unexpected failure."""

    status_code = 500
    error_type = "internal_error"
    message = "Internal server error"


def storage_errors(message: str):
    """Decorator converting storage faults into :class:`InternalError`.

    Usage:
        @storage_errors("Failed to fetch skills")
        async def list_skills(db):
            ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Error in {func.__name__}: {type(e).__name__}: {e}")
                raise InternalError(message) from e
        return wrapper
    return decorator


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error_type}: {exc.message} ({request.url.path})")
        else:
            logger.warning(f"{exc.error_type}: {exc.message} ({request.url.path})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(_format_validation_error(exc))
        logger.warning(f"{error.error_type}: {error.message} ({request.url.path})")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "not_found",
                    "message": "Endpoint not found",
                    "path": request.url.path,
                    "available_endpoints": AVAILABLE_ENDPOINTS,
                },
            )
        if exc.status_code == 405:
            error_type = "method_not_allowed"
        else:
            error_type = "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error_type, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {type(exc).__name__}: {exc}")
        # Don't expose error details outside development
        message = str(exc) if settings.is_development else "Something went wrong"
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error", "message": message},
        )
