from __future__ import annotations
from datetime import date, datetime
from typing import Optional

import dateparser

_FORMATS = ["%Y-%m-%d", "%Y/%m/%d", "%d.%m.%Y", "%d/%m/%Y"]


def parse_date(value) -> Optional[date]:
    """
    Parses trip dates. Supports:
    - date / datetime objects (returned as date)
    - YYYY-MM-DD, YYYY/MM/DD, DD.MM.YYYY, DD/MM/YYYY
    - Natural language dates (e.g., "5 March", "next friday") via dateparser
    If parsing fails, returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    v = str(value).strip()
    if not v or v.lower() in ("null", "none"):
        return None

    for fmt in _FORMATS:
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(v).date()
    except ValueError:
        pass

    parsed = dateparser.parse(
        v,
        settings={"PREFER_DATES_FROM": "future"},
    )
    if parsed:
        return parsed.date()
    return None


def nights_between(start: Optional[date], end: Optional[date]) -> Optional[int]:
    """Number of nights between two dates, or None when it can't be derived."""
    if not start or not end:
        return None
    nights = (end - start).days
    if nights <= 0:
        return None
    return nights
