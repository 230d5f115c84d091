# =============================================================================
# petcare_core/analytics/visits.py
# Upcoming / past split of scheduled vet visits
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from petcare_core.models import VetVisit


def is_upcoming(visit: VetVisit, now: datetime) -> bool:
    """Not completed and scheduled strictly after now. A tie is past."""
    if visit.completed or visit.scheduled_at is None:
        return False
    return visit.scheduled_at > now


def partition_visits(visits: Iterable[VetVisit], now: datetime) -> Tuple[List[VetVisit], List[VetVisit]]:
    """
    Split visits into (upcoming, past), each keeping the input order.

    ``now`` must be timezone-aware; visit times are UTC instants.
    """
    upcoming: List[VetVisit] = []
    past: List[VetVisit] = []
    for visit in visits:
        (upcoming if is_upcoming(visit, now) else past).append(visit)
    return upcoming, past


def next_visit(visits: Iterable[VetVisit], now: datetime) -> Optional[VetVisit]:
    """Soonest upcoming visit, or None."""
    upcoming, _ = partition_visits(visits, now)
    return min(upcoming, key=lambda v: v.scheduled_at, default=None)
