"""Application-wide exception handlers.

Every error leaves the API as ``{"message": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_backend.api.validators import first_error_message

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."
INVALID_JSON_MESSAGE = "Request body is not valid JSON."


def register_error_handlers(app: FastAPI) -> None:
    """Register the HTTP, validation and catch-all handlers on ``app``."""
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Request failed with %s",
            exc.status_code,
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors and errors[0].get("type") == "json_invalid":
        message = INVALID_JSON_MESSAGE
    else:
        # Drop the leading "body"/"path"/"query" location segment.
        message = first_error_message(errors, skip_loc=1)
    logger.warning(
        "Validation error: %s",
        message,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"message": message}
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware re-raises afterwards; the server logs the traceback.
    logger.error(
        "Unhandled exception: %s",
        exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )
