"""
Global exception handlers.

Every failure leaves the API as the same envelope,
``{"error": {"text": "<message>"}}``:

* ``ApiError`` / ``StoreError``: the error's own text and status code.
* ``HTTPException`` (unknown route, method not allowed): the detail.
* ``RequestValidationError``: the first field error.
* Anything else: a generic 500 message; details go to the log only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import ApiError, StoreError, error_envelope

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error("Store error on %s %s: %s", request.method, request.url.path, exc.text)
        else:
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.text)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        logger.warning("Validation error on %s: %s", request.url.path, errors)
        text = errors[0]["msg"] if errors else "invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_envelope(text))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope("internal server error"),
        )
