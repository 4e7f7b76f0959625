# app/errors.py
"""
Application exceptions and the FastAPI handlers that turn them into the
JSON error body returned by every failing request:

    {"statusCode": 404, "timestamp": "...", "path": "/movies/favorites/tt1",
     "method": "DELETE", "message": "Movie with imdbID 'tt1' not found"}
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSearchQueryError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Search query must be a non-empty string")


class MovieNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, imdb_id: str):
        super().__init__(f"Movie with imdbID '{imdb_id}' not found")


class MovieAlreadyExistsError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, imdb_id: str):
        super().__init__(f"Movie with imdbID '{imdb_id}' already exists in favorites")


class ExternalApiError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, service_name: str, detail: Optional[str] = None):
        message = f"External service '{service_name}' is unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.service_name = service_name


class FavoritesStorageError(AppError):
    def __init__(self, detail: str = "Failed to save favorites to file"):
        super().__init__(detail)


def validation_messages(errors) -> List[str]:
    """Flatten pydantic error dicts into plain messages."""
    messages = []
    for err in errors:
        msg = err.get("msg", "Invalid value")
        # custom ValueErrors come back as "Value error, <our message>"
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(msg)
    return messages


def error_body(request: Request, status_code: int, message: Message) -> dict:
    return {
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
        "message": message,
    }


def _respond(request: Request, status_code: int, message: Message, exc: Exception) -> JSONResponse:
    logger.error(
        "%s %s - %s - %s",
        request.method,
        request.url.path,
        status_code,
        message,
        exc_info=exc if status_code >= 500 else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_body(request, status_code, message),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _respond(request, exc.status_code, exc.message, exc)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if not isinstance(detail, (str, list)):
        detail = str(detail)
    return _respond(request, exc.status_code, detail, exc)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _respond(
        request,
        status.HTTP_400_BAD_REQUEST,
        validation_messages(exc.errors()),
        exc,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    message = str(exc) or "Internal server error"
    return _respond(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
