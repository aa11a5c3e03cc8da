# ticketdesk/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ticketdesk.core.config import get_settings

logger = logging.getLogger(__name__)


class TicketDeskError(Exception):
    """Base class for every error the ticket core reports to callers."""

    message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"detail": self.message}


class TicketValidationError(TicketDeskError):
    message = "Validation failed"

    def __init__(self, errors: dict[str, str], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    def to_body(self) -> dict:
        return {"detail": self.message, "errors": self.errors}


class InvalidIdentifier(TicketDeskError):
    message = "Ticket ID is missing"


class MalformedIdentifier(TicketDeskError):
    message = "Invalid ticket ID format"


class EmptyUpdate(TicketDeskError):
    message = "No update data provided"


class InvalidPayload(TicketDeskError):
    message = "Invalid JSON in request body"


class TicketNotFound(TicketDeskError):
    message = "Ticket not found"


class StoreUnavailable(TicketDeskError):
    message = "Ticket store is unavailable"


# Error kind -> HTTP status, applied by the single handler below
ERROR_STATUS_CODES: dict[type[TicketDeskError], int] = {
    TicketValidationError: 400,
    InvalidIdentifier: 400,
    MalformedIdentifier: 400,
    EmptyUpdate: 400,
    InvalidPayload: 400,
    TicketNotFound: 404,
    StoreUnavailable: 500,
}


def status_code_for(exc: TicketDeskError) -> int:
    for kind in type(exc).__mro__:
        if kind in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[kind]
    return 500


async def handle_ticketdesk_error(request: Request, exc: TicketDeskError) -> JSONResponse:
    status_code = status_code_for(exc)
    body = exc.to_body()
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
        if exc.__cause__ is not None and get_settings().expose_error_details:
            body["cause"] = str(exc.__cause__)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TicketDeskError, handle_ticketdesk_error)


__all__ = [
    "ERROR_STATUS_CODES",
    "EmptyUpdate",
    "InvalidIdentifier",
    "InvalidPayload",
    "MalformedIdentifier",
    "StoreUnavailable",
    "TicketDeskError",
    "TicketNotFound",
    "TicketValidationError",
    "register_error_handlers",
    "status_code_for",
]
