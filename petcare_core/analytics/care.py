# =============================================================================
# petcare_core/analytics/care.py
# Active medications and expiring documents
# =============================================================================

from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from petcare_core.models import Document, Medication
from petcare_core.models.dates import calendar_date_of


def _as_date(value: Union[date, datetime]) -> date:
    return calendar_date_of(value) if isinstance(value, datetime) else value


def active_medications(medications: Iterable[Medication], today: Union[date, datetime]) -> List[Medication]:
    """Medications switched on whose end date, if any, is today or later."""
    day = _as_date(today)
    return [
        m for m in medications
        if m.active and (m.end_date is None or m.end_date >= day)
    ]


def expiring_documents(
    documents: Iterable[Document],
    today: Union[date, datetime],
    within_days: int = 30,
) -> List[Document]:
    """
    Documents with an expiry date between today and today + within_days,
    soonest first. Already expired documents are included.
    """
    day = _as_date(today)
    horizon = day + timedelta(days=within_days)
    expiring = [d for d in documents if d.expiry_date is not None and d.expiry_date <= horizon]
    return sorted(expiring, key=lambda d: d.expiry_date)
