# ticketdesk/ticket/schemas.py
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from ticketdesk.ticket.models import Ticket, TicketStatus

Title = Annotated[str, StringConstraints(min_length=5, max_length=80)]
Priority = Annotated[int, Field(ge=1, le=5, strict=True)]
Assignee = Annotated[str, StringConstraints(min_length=2)]

# keeps (page - 1) * limit well inside the 64-bit skip BSON can encode
MAX_PAGE = 10_000_000


class TicketCreate(BaseModel):
    title: Title
    description: str = ""
    status: TicketStatus
    priority: Priority
    assignee: Assignee | None = None

    model_config = ConfigDict(extra="ignore", use_enum_values=True)


class TicketUpdate(BaseModel):
    title: Title | None = None
    description: str | None = None
    status: TicketStatus | None = None
    priority: Priority | None = None
    assignee: Assignee | None = None

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    @field_validator("title", "description", "status", "priority", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value

    @field_validator("assignee", mode="before")
    @classmethod
    def empty_assignee_unassigns(cls, value):
        if value == "":
            return None
        return value


class TicketListing(BaseModel):
    search: str | None = None
    status: TicketStatus | None = None
    sort: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=9, ge=1, le=100)

    model_config = ConfigDict(extra="ignore")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class TicketOut(BaseModel):
    ticket: Ticket


class TicketPage(BaseModel):
    data: list[Ticket]
    has_more: bool = Field(alias="hasMore")
    page: int = 1
    limit: int = 9

    model_config = ConfigDict(populate_by_name=True)


class DeleteOut(BaseModel):
    message: str


class TicketLookup(BaseModel):
    id: str
