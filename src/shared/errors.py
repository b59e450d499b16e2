"""Translate exceptions raised anywhere in the API into ``{"error": ...}`` bodies.

Mapping:
    HTTPException            -> its own status code (401/403/404 from guards and routes)
    RequestValidationError   -> 400 (missing or malformed request fields)
    ValidationError          -> 400 (domain rule violations)
    ObjectNotFoundError      -> 404
    CredentialError          -> the status carried by the error (400/403/409)
    anything else            -> 500, logged with traceback, generic message
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from access.credentials import CredentialError
from shared.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def message_from(messages) -> str:
    """Flatten Protean-style error payloads into a single readable message."""
    if messages is None:
        return ""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        parts = []
        for field, errors in messages.items():
            text = message_from(errors)
            # Framework messages are fragments ("is required"); ours are full sentences
            parts.append(text if text[:1].isupper() else f"{field} {text}")
        return "; ".join(parts)
    if isinstance(messages, (list, tuple)):
        return "; ".join(message_from(m) for m in messages)
    return str(messages)


def _request_validation_message(exc: RequestValidationError) -> str:
    missing = []
    invalid = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        if error.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {error.get('msg')}")

    if missing:
        return "Missing required fields: " + ", ".join(missing)
    return "; ".join(invalid) or "Invalid request"


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message_from(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, _request_validation_message(exc))


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(400, message_from(exc.messages))


async def _not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return error_response(404, str(exc) or "Not found")


async def _credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Install the ``{"error": ...}`` exception handlers on ``app``."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, _not_found_handler)
    app.add_exception_handler(CredentialError, _credential_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
