"""Domain errors and the handlers that turn them into HTTP responses."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "domain_error"
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Resource already exists"


class PermissionDenied(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"
    default_message = "Not allowed"


class InvalidInput(DomainError):
    """Input that is well-formed but inconsistent with stored data."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_input"
    default_message = "Invalid input"


class DuplicateBookingRequest(Conflict):
    """A booking request already exists for this (property, tenant) pair."""

    code = "duplicate_booking_request"
    default_message = "Booking request already exists for this property and tenant"


class InvalidStatusValue(DomainError):
    """A status token outside the closed booking-request status set."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_status_value"
    default_message = "Invalid booking request status"


class InvalidStatusTransition(DomainError):
    """The requested status cannot follow the current one."""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_status_transition"
    default_message = "Status transition not allowed"


class ReferentialViolation(DomainError):
    """A referenced row (property, tenant, building, operator) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "referential_violation"
    default_message = "Referenced resource not found"


class NullabilityViolation(DomainError):
    """A required field was missing or set to null."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "nullability_violation"
    default_message = "Required field missing"


class DomainErrorHandler:
    async def __call__(self, request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"[API] {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"[API] {request.method} {request.url.path} -> {exc.status_code} {exc.code}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = []

        for err in exc.errors():
            errors.append({
                "loc": err.get("loc"),
                "msg": str(err.get("msg")),
                "type": err.get("type"),
            })

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": errors, "code": "validation_error"},
        )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, DomainErrorHandler())
    app.add_exception_handler(RequestValidationError, ValidationErrorHandler())
