# =============================================================================
# petcare_core/models/dates.py
# Calendar dates vs. instants
# =============================================================================
"""
Two distinct temporal types flow through the data layer:

- calendar date (``datetime.date``): birth dates, expense dates, medication
  start/end dates. Stored by the backend as ``YYYY-MM-DD`` and never
  shifted through a timezone.
- instant (timezone-aware ``datetime`` in UTC): created/updated stamps,
  vet visit schedules, weigh-ins, feeding and dose logs.
"""

from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as dateutil_parser


def utc_now() -> datetime:
    """Current instant as a UTC timezone-aware datetime."""
    return datetime.now(timezone.utc)


def parse_instant(value: Any) -> Optional[datetime]:
    """
    Parse an ISO timestamp into a UTC-aware datetime.

    Naive values are taken to be UTC. ``None`` and ``""`` give ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = dateutil_parser.isoparse(str(value))
        except ValueError as e:
            raise ValueError(f"Invalid ISO timestamp: {value!r}") from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Parse a date-only value into a calendar date.

    The leading ``YYYY-MM-DD`` is read literally; a time or offset that
    follows it is ignored rather than converted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as e:
        raise ValueError(f"Invalid calendar date: {value!r}") from e


def calendar_date_of(instant: datetime) -> date:
    """The UTC calendar date an instant falls on."""
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(timezone.utc).date()


def to_iso_string(dt: datetime) -> str:
    """datetime -> ISO string in UTC with a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_date_string(d: date) -> str:
    return d.strftime("%Y-%m-%d")
