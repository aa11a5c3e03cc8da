# ticketdesk/ticket/validators.py
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ticketdesk.core.errors import EmptyUpdate, InvalidPayload, TicketValidationError
from ticketdesk.ticket.schemas import TicketCreate, TicketListing, TicketUpdate


def _field_errors(exc: ValidationError) -> dict[str, str]:
    # one message per offending field, first reported wins
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        errors.setdefault(field, error["msg"])
    return errors


def _validate(model: type[BaseModel], payload: Any) -> Any:
    if not isinstance(payload, Mapping):
        raise InvalidPayload("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TicketValidationError(_field_errors(exc)) from exc


def validate_create(payload: Any) -> TicketCreate:
    return _validate(TicketCreate, payload)


def validate_update(payload: Any) -> TicketUpdate:
    patch = _validate(TicketUpdate, payload)
    if not patch.model_fields_set:
        raise EmptyUpdate()
    return patch


def validate_listing(params: Mapping[str, str | None]) -> TicketListing:
    """Parse the list view's query string; blank values count as absent."""
    cleaned = {key: value.strip() for key, value in params.items() if value is not None and value.strip()}
    if cleaned.get("status") == "all":
        del cleaned["status"]
    if "sort" in cleaned:
        cleaned["sort"] = cleaned["sort"].lower()
    return _validate(TicketListing, cleaned)
