"""
Mapping of exceptions to HTTP error responses.

``register_exception_handlers`` installs one handler per error family
on the FastAPI application.  Every handler returns the body described
by ``schemas.error``: ``timestamp``, ``status``, ``error`` and
``message``, plus ``validationErrors`` for malformed input.
Unexpected exceptions are logged with their traceback and answered
with a generic 500 so no internal detail reaches the client.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from contact_directory_api.app.core.exceptions import (
    ContactAlreadyExistsError,
    ContactAppError,
    ContactNotFoundError,
)
from contact_directory_api.app.schemas.contact import REQUIRED_MESSAGES
from contact_directory_api.app.schemas.error import ErrorResponse, ValidationErrorResponse


logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def error_response(status_code: int, error: str, message: str,
                   validation_errors: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Build a JSON error response in the common error shape."""
    if validation_errors is None:
        body = ErrorResponse(status=status_code, error=error, message=message)
    else:
        body = ValidationErrorResponse(
            status=status_code,
            error=error,
            message=message,
            validationErrors=validation_errors,
        )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _field_errors(exc: RequestValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into ``{"field": "message"}``.

    The ``body``/``query``/``path`` location prefix is dropped, so a
    batch item error is keyed like ``"0.mobile"``.  The first message
    for a field wins.
    """
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path", "header", "cookie"}:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        message = err.get("msg", "Invalid value")
        if err.get("type") == "missing" and loc and loc[-1] in REQUIRED_MESSAGES:
            message = REQUIRED_MESSAGES[loc[-1]]
        elif message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.setdefault(field, message)
    return errors


async def handle_not_found(request: Request, exc: ContactNotFoundError) -> JSONResponse:
    logger.warning("Contact not found: %s", exc.message)
    return error_response(status.HTTP_404_NOT_FOUND, "Contact Not Found", exc.message)


async def handle_already_exists(request: Request, exc: ContactAlreadyExistsError) -> JSONResponse:
    logger.warning("Contact already exists: %s", exc.message)
    return error_response(status.HTTP_409_CONFLICT, "Contact Already Exists", exc.message)


async def handle_app_error(request: Request, exc: ContactAppError) -> JSONResponse:
    logger.error("Contact application error: %s", exc.message, exc_info=exc)
    return error_response(status.HTTP_400_BAD_REQUEST, "Contact Application Error", exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _field_errors(exc)
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, errors)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation Failed",
        "Invalid input data",
        validation_errors=errors,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error: %s", exc, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to ``app``."""
    app.add_exception_handler(ContactNotFoundError, handle_not_found)
    app.add_exception_handler(ContactAlreadyExistsError, handle_already_exists)
    app.add_exception_handler(ContactAppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
