# ticketdesk/ticket/services.py
import logging
import re
from contextlib import contextmanager
from typing import Any

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from ticketdesk.core.clock import Clock, to_millis, utcnow
from ticketdesk.core.errors import StoreUnavailable
from ticketdesk.ticket.models import Ticket
from ticketdesk.ticket.schemas import TicketCreate, TicketListing, TicketPage, TicketUpdate

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    try:
        yield
    except PyMongoError as exc:
        raise StoreUnavailable(f"Ticket store is unavailable ({operation})") from exc


def build_ticket_query(search: str | None = None, status: str | None = None) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}
    if status:
        query["status"] = status
    return query


async def list_tickets(tickets: AsyncCollection, listing: TicketListing) -> TicketPage:
    """Return one page of tickets ordered by ``createdAt``.

    Ties on ``createdAt`` keep the store's natural order. One extra row is
    fetched to tell whether another page exists.
    """
    status = listing.status.value if listing.status else None
    query = build_ticket_query(listing.search, status)
    direction = ASCENDING if listing.sort == "asc" else DESCENDING
    with store_errors("list"):
        cursor = tickets.find(
            query,
            sort=[("createdAt", direction)],
            skip=listing.offset,
            limit=listing.limit + 1,
        )
        documents = await cursor.to_list(length=listing.limit + 1)
    return TicketPage(
        data=[Ticket.from_document(doc) for doc in documents[: listing.limit]],
        has_more=len(documents) > listing.limit,
        page=listing.page,
        limit=listing.limit,
    )


async def get_ticket(tickets: AsyncCollection, ticket_id: ObjectId) -> Ticket | None:
    with store_errors("get"):
        document = await tickets.find_one({"_id": ticket_id})
    return Ticket.from_document(document) if document else None


async def create_ticket(tickets: AsyncCollection, payload: TicketCreate, now: Clock = utcnow) -> Ticket:
    timestamp = to_millis(now())
    document = {**payload.model_dump(), "createdAt": timestamp, "updatedAt": timestamp}
    with store_errors("create"):
        result = await tickets.insert_one(document)
    document["_id"] = result.inserted_id
    logger.info("Created ticket %s", result.inserted_id)
    return Ticket.from_document(document)


async def update_ticket(
    tickets: AsyncCollection,
    ticket_id: ObjectId,
    patch: TicketUpdate,
    now: Clock = utcnow,
) -> Ticket | None:
    changes = patch.model_dump(exclude_unset=True)
    with store_errors("update"):
        document = await tickets.find_one_and_update(
            {"_id": ticket_id},
            {"$set": {**changes, "updatedAt": to_millis(now())}},
            return_document=ReturnDocument.AFTER,
        )
    if not document:
        return None
    logger.info("Updated ticket %s fields=%s", ticket_id, sorted(changes))
    return Ticket.from_document(document)


async def delete_ticket(tickets: AsyncCollection, ticket_id: ObjectId) -> Ticket | None:
    with store_errors("delete"):
        document = await tickets.find_one_and_delete({"_id": ticket_id})
    if not document:
        return None
    logger.info("Deleted ticket %s (%r)", ticket_id, document.get("title"))
    return Ticket.from_document(document)
