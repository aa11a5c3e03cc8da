# ticketdesk/ticket/identifiers.py
import re
from typing import Any

from bson import ObjectId

from ticketdesk.core.errors import InvalidIdentifier, MalformedIdentifier

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def normalize_ticket_id(raw: Any) -> ObjectId:
    """Turn an externally supplied ticket id into the store's ``ObjectId``.

    Handlers call this once at the boundary; nothing downstream queries by the
    raw string form.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidIdentifier()
    if not OBJECT_ID_PATTERN.fullmatch(raw):
        raise MalformedIdentifier()
    return ObjectId(raw)
