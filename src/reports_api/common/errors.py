"""Error types and their HTTP problem-document handlers.

Validation problems are reported as 400 with a problem document carrying the
entity name, an error key and a human message. Store and serialization
failures become 500s; nothing here retries or hides the original error.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.config import get_application_name
from .headers import create_failure_alert

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "about:blank"
CONSTRAINT_VIOLATION_TYPE = "/problem/constraint-violation"
PROBLEM_MEDIA_TYPE = "application/problem+json"


class BadRequestAlertError(Exception):
    """A client error that is also announced through failure alert headers."""

    def __init__(self, default_message: str, entity_name: str, error_key: str):
        super().__init__(default_message)
        self.default_message = default_message
        self.entity_name = entity_name
        self.error_key = error_key


class StoreError(Exception):
    """Raised when the backing store fails (I/O, conflict, lost connection)."""


class SerializationError(Exception):
    """Raised when the export payload cannot be encoded as JSON."""


def problem_response(
    status_code: int,
    title: str,
    error_key: str,
    entity_name: Optional[str] = None,
    type_: str = DEFAULT_TYPE,
    headers: Optional[dict[str, str]] = None,
    **extra,
) -> JSONResponse:
    content = {
        "type": type_,
        "title": title,
        "status": status_code,
        "message": f"error.{error_key}",
        "errorKey": error_key,
    }
    if entity_name is not None:
        content["entityName"] = entity_name
        content["params"] = entity_name
    content.update(extra)
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertError) -> JSONResponse:
    application_name = get_application_name(request)
    logger.info(
        f"Bad request on {request.method} {request.url.path}: "
        f"{exc.entity_name}/{exc.error_key} - {exc.default_message}"
    )
    return problem_response(
        status.HTTP_400_BAD_REQUEST,
        title=exc.default_message,
        error_key=exc.error_key,
        entity_name=exc.entity_name,
        headers=create_failure_alert(
            application_name, True, exc.entity_name, exc.error_key, exc.default_message
        ),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "location": error.get("loc", ("",))[0],
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    logger.info(f"Invalid request on {request.method} {request.url.path}: {field_errors}")
    return problem_response(
        status.HTTP_400_BAD_REQUEST,
        title="Method argument not valid",
        error_key="validation",
        type_=CONSTRAINT_VIOLATION_TYPE,
        fieldErrors=field_errors,
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        error_key="store",
        detail=str(exc),
    )


async def serialization_error_handler(request: Request, exc: SerializationError) -> JSONResponse:
    logger.error(f"Serialization failure on {request.url.path}: {exc}", exc_info=exc)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        error_key="serialization",
        detail=str(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the problem-document handlers on the application."""
    app.add_exception_handler(BadRequestAlertError, bad_request_alert_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(SerializationError, serialization_error_handler)
