"""Application-level exceptions and FastAPI exception handlers."""


import functools
import logging
from collections.abc import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gridgas_admin.core.sanitize import ErrorMessages, sanitize_database_error, sanitize_error

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, message: str = ErrorMessages.NOT_FOUND):
        super().__init__(message, status_code=404, code="NOT_FOUND")

class ForbiddenError(AppException):
    def __init__(self, message: str = ErrorMessages.FORBIDDEN):
        super().__init__(message, status_code=403, code="FORBIDDEN")

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")

class ConflictError(AppException):
    def __init__(self, message: str = ErrorMessages.CONFLICT):
        super().__init__(message, status_code=409, code="CONFLICT")

class BadRequestError(AppException):
    def __init__(self, message: str = ErrorMessages.BAD_REQUEST):
        super().__init__(message, status_code=400, code="BAD_REQUEST")

class InternalError(AppException):
    def __init__(self, message: str = ErrorMessages.INTERNAL_ERROR):
        super().__init__(message, status_code=500, code="INTERNAL_ERROR")

class UpstreamServiceError(AppException):
    """Raised when a downstream BaaS function or service call fails."""

    def __init__(self, message: str):
        super().__init__(message, status_code=502, code="UPSTREAM_ERROR")

# ---------------------------------------------------------------------------
# Endpoint fallback wrapper
# ---------------------------------------------------------------------------

def fallback_message(message: str) -> Callable:
    """Convert unexpected endpoint errors into a sanitized :class:`AppException`.

    Application and HTTP exceptions pass through untouched. Database errors are
    reduced to one of the safe database messages; anything else keeps its own
    message unless it looks sensitive, in which case *message* is returned.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (AppException, HTTPException):
                raise
            except SQLAlchemyError as exc:
                logger.exception("[%s] database error", func.__name__)
                raise InternalError(sanitize_database_error(exc)) from exc
            except Exception as exc:
                logger.exception("[%s] %s", func.__name__, message)
                raise InternalError(sanitize_error(exc, message)) from exc

        return wrapper

    return decorator

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str) -> dict:
    return {"error": message, "code": code}

def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ErrorMessages.VALIDATION_FAILED
    first = errors[0]
    msg = str(first.get("msg") or ErrorMessages.VALIDATION_FAILED)
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{field}: {msg}" if field else msg

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("VALIDATION_ERROR", _first_validation_message(exc)),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", ErrorMessages.NOT_FOUND),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", ErrorMessages.INTERNAL_ERROR),
        )
