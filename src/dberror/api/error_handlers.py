"""
FastAPI exception handlers for StructuredError.

Register on your app factory:

    from dberror.api.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)

Route code then raises translated errors, e.g. ``raise get_error(exc) from exc``
or ``with translate_errors(): ...``, and clients get:

    HTTP 409
    {"detail": "A email already exists with this value (a@b.com)", "code": "23505", "fields": ["email"]}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dberror.config.settings import Settings, get_settings
from dberror.exceptions.base import StructuredError

logger = logging.getLogger(__name__)


def make_structured_error_handler(settings: Settings | None = None):
    """Return a handler bound to ``settings`` (get_settings() when omitted)."""

    async def structured_error_handler(request: Request, exc: StructuredError) -> JSONResponse:
        active = settings or get_settings()
        status = exc.http_status()
        logger.info(
            "StructuredError for %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            extra={"sqlstate": exc.code, "status_code": status},
        )
        return JSONResponse(
            status_code=status,
            content=exc.to_payload(include_detail=active.EXPOSE_ERROR_DETAIL),
        )

    return structured_error_handler


def register_exception_handlers(app: FastAPI, settings: Settings | None = None) -> None:
    app.add_exception_handler(StructuredError, make_structured_error_handler(settings))
