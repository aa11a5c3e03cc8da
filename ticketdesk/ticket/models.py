# ticketdesk/ticket/models.py
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TICKETS_COLLECTION = "tickets"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Ticket(BaseModel):
    """A document of the ``tickets`` collection, with ``_id`` exposed as ``id``."""

    id: str
    title: str
    description: str = ""
    status: TicketStatus
    priority: int
    assignee: str | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Ticket":
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)
