"""
Error taxonomy for the scan tracker.

Every failure a handler can produce is an AppError subclass. Handlers raise
the first error they hit and never roll back writes made before it; the
exception handler registered on the app turns the error into a JSON body
with a matching status code, so HTML routes never return half-rendered pages.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors surfaced to the caller"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"
    prefix: str = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class DatabaseError(AppError):
    """A table lock could not be acquired"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "database_error"
    prefix = "Database error"


class NotFoundError(AppError):
    """A referenced short_id does not exist"""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"
    prefix = "Not found"


class ValidationError(AppError):
    """A required field is missing, not a string, or blank"""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"
    prefix = "Validation error"

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class TemplateError(AppError):
    """A template failed to load or render"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "template_error"
    prefix = "Template error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert an AppError into a structured JSON rejection"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")

    body = {"error": exc.error, "detail": str(exc)}
    if isinstance(exc, ValidationError) and exc.fields:
        body["fields"] = exc.fields
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report undecodable bodies (e.g. malformed JSON) as a ValidationError"""
    fields = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if not isinstance(part, int)]
        name = loc[-1] if loc else "body"
        if name not in fields:
            fields.append(name)
    message = "; ".join(item.get("msg", "invalid input") for item in exc.errors()) or "Invalid request"
    return await app_error_handler(request, ValidationError(message, fields=fields))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
