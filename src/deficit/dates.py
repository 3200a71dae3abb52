"""Calendar-day helpers.

All day arithmetic in the engine is done on ``datetime.date`` values. Any
``datetime`` passed in is truncated to its calendar day, which is the Python
equivalent of normalizing a timestamp to midnight.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def as_day(value: DateLike) -> date:
    """Return the calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_today(today: Optional[DateLike] = None) -> date:
    """Return ``today`` as a calendar day, defaulting to the local date."""
    if today is None:
        return date.today()
    return as_day(today)
