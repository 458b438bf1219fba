"""API error types and their exception handlers."""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from patient_service.repositories.base import InvalidSortError
from patient_service.routes.headers import create_failure_alert

logger = logging.getLogger(__name__)

PROBLEM_BASE_URL = "https://www.jhipster.tech/problem"
BAD_REQUEST_TYPE = f"{PROBLEM_BASE_URL}/problem-with-message"


class BadRequestAlertError(Exception):
    """Client error carrying an entity name and error key for localization.

    Args:
        message: Human readable description (the response ``title``).
        entity_name: Entity the request was about.
        error_key: Translation key suffix, e.g. ``idexists``.
    """

    def __init__(self, message: str, entity_name: str, error_key: str):
        super().__init__(message)
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertError) -> JSONResponse:
    """Render a BadRequestAlertError as a 400 problem response."""
    logger.debug("Bad request on %s: %s (%s)", request.url.path, exc.message, exc.error_key)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "type": BAD_REQUEST_TYPE,
            "title": exc.message,
            "status": status.HTTP_400_BAD_REQUEST,
            "message": f"error.{exc.error_key}",
            "params": exc.entity_name,
            "entityName": exc.entity_name,
            "errorKey": exc.error_key,
        },
        headers=create_failure_alert(exc.entity_name, exc.error_key),
        media_type="application/problem+json",
    )


async def invalid_sort_handler(request: Request, exc: InvalidSortError) -> JSONResponse:
    """Render an unknown sort property as 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


async def dms_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    """Render a document-service failure as 502 Bad Gateway."""
    upstream_status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
    logger.warning("Document service call failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "title": "Document service unavailable",
            "status": status.HTTP_502_BAD_GATEWAY,
            "upstreamStatus": upstream_status,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BadRequestAlertError, bad_request_alert_handler)
    app.add_exception_handler(InvalidSortError, invalid_sort_handler)
    app.add_exception_handler(httpx.HTTPError, dms_error_handler)
