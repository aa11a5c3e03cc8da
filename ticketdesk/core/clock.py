# ticketdesk/core/clock.py
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def to_millis(value: datetime) -> datetime:
    """Drop the sub-millisecond part BSON dates cannot keep."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utcnow() -> datetime:
    return to_millis(datetime.now(timezone.utc))


# Common clock dependency, overridden in tests
def get_clock() -> Clock:
    return utcnow
