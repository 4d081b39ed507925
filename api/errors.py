"""API error type and the JSON error body every failure uses."""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from richtext.errors import FormatError, RemoteError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Something went wrong processing this request."


class APIError(Exception):
    """An error returned to the client as ``{timestamp, code, error, message}``."""

    def __init__(self, status: int = 500, message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @classmethod
    def bad_request(cls, message: str) -> "APIError":
        return cls(400, message)

    @classmethod
    def unauthorized(cls) -> "APIError":
        return cls(401, "You are not authorized to perform this action.")

    @classmethod
    def not_found(cls, message: str) -> "APIError":
        return cls(404, message)


def error_body(status: int, message: str) -> dict[str, Any]:
    try:
        reason = HTTPStatus(status).phrase
    except ValueError:
        reason = "Unknown"
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "code": status,
        "error": reason,
        "message": message,
    }


def _respond(status: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_body(status, message), headers=headers)


async def _api_error(request: Request, exc: APIError) -> JSONResponse:
    return _respond(exc.status, exc.message)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else DEFAULT_MESSAGE
    return _respond(exc.status_code, message, getattr(exc, "headers", None))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return _respond(400, "Invalid request format.")


async def _format_error(request: Request, exc: FormatError) -> JSONResponse:
    logger.warning("Document import failed for %s: %s", request.url.path, exc)
    return _respond(422, "Could not import this document.")


async def _remote_error(request: Request, exc: RemoteError) -> JSONResponse:
    logger.error("Document source failed for %s: %s", request.url.path, exc)
    return _respond(502, "The document service is unavailable.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, _api_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(FormatError, _format_error)
    app.add_exception_handler(RemoteError, _remote_error)
