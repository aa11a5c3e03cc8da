# ticketdesk/ticket/routes.py
import json
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from pymongo.asynchronous.collection import AsyncCollection

from ticketdesk.core.clock import Clock, get_clock
from ticketdesk.core.database import get_collection
from ticketdesk.core.errors import InvalidPayload, TicketNotFound
from ticketdesk.ticket import services as ticket_service
from ticketdesk.ticket.identifiers import normalize_ticket_id
from ticketdesk.ticket.models import TICKETS_COLLECTION, Ticket
from ticketdesk.ticket.schemas import DeleteOut, TicketCreate, TicketLookup, TicketOut, TicketPage, TicketUpdate
from ticketdesk.ticket.validators import validate_create, validate_listing, validate_update

router = APIRouter(prefix="/tickets", tags=["Tickets"])


async def get_tickets() -> AsyncCollection:
    return await get_collection(TICKETS_COLLECTION)


async def read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidPayload() from exc


def json_body(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI request body for handlers that read and validate JSON themselves."""
    schema = model.model_json_schema(ref_template="#/components/schemas/{model}")
    # referenced enums are already published under components via the response models
    schema.pop("$defs", None)
    return {"requestBody": {"required": True, "content": {"application/json": {"schema": schema}}}}


def found(ticket: Ticket | None) -> Ticket:
    if ticket is None:
        raise TicketNotFound()
    return ticket


@router.get("", response_model=TicketPage)
async def list_all(
    search: str | None = Query(default=None, description="Case-insensitive title search"),
    status: str | None = Query(default=None, description="open, in_progress, resolved, closed or all"),
    sort: str | None = Query(default=None, description="Order by creation time: asc or desc"),
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Page size, 1-100"),
    tickets: AsyncCollection = Depends(get_tickets),
):
    listing = validate_listing({"search": search, "status": status, "sort": sort, "page": page, "limit": limit})
    return await ticket_service.list_tickets(tickets, listing)


@router.post("", response_model=TicketOut, status_code=201, openapi_extra=json_body(TicketCreate))
async def create(
    request: Request,
    tickets: AsyncCollection = Depends(get_tickets),
    now: Clock = Depends(get_clock),
):
    payload = validate_create(await read_json(request))
    return TicketOut(ticket=await ticket_service.create_ticket(tickets, payload, now))


@router.post("/get-by-id", response_model=TicketOut, openapi_extra=json_body(TicketLookup))
async def lookup(request: Request, tickets: AsyncCollection = Depends(get_tickets)):
    body = await read_json(request)
    if not isinstance(body, dict):
        raise InvalidPayload("Request body must be a JSON object")
    ticket_id = normalize_ticket_id(body.get("id"))
    return TicketOut(ticket=found(await ticket_service.get_ticket(tickets, ticket_id)))


@router.get("/{ticket_id}", response_model=TicketOut)
async def get(ticket_id: str, tickets: AsyncCollection = Depends(get_tickets)):
    oid = normalize_ticket_id(ticket_id)
    return TicketOut(ticket=found(await ticket_service.get_ticket(tickets, oid)))


@router.patch("/{ticket_id}", response_model=TicketOut, openapi_extra=json_body(TicketUpdate))
async def update(
    ticket_id: str,
    request: Request,
    tickets: AsyncCollection = Depends(get_tickets),
    now: Clock = Depends(get_clock),
):
    oid = normalize_ticket_id(ticket_id)
    patch = validate_update(await read_json(request))
    return TicketOut(ticket=found(await ticket_service.update_ticket(tickets, oid, patch, now)))


@router.delete("/{ticket_id}", response_model=DeleteOut)
async def delete(ticket_id: str, tickets: AsyncCollection = Depends(get_tickets)):
    oid = normalize_ticket_id(ticket_id)
    found(await ticket_service.delete_ticket(tickets, oid))
    return DeleteOut(message="Ticket deleted successfully")
