# =============================================================================
# petcare_core/analytics/weights.py
# Chronological weight history
# =============================================================================

from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from petcare_core.models import WeightRecord

# Records without a timestamp sort after every dated one
_MISSING = datetime.max.replace(tzinfo=timezone.utc)


def _recorded_key(record: WeightRecord) -> datetime:
    return record.recorded_at or _MISSING


def insert_chronological(history: Iterable[WeightRecord], record: WeightRecord) -> List[WeightRecord]:
    """
    New history list with ``record`` added, ascending by recorded_at.

    The whole list is re-sorted: a back-dated weigh-in lands in its
    place rather than at the end. Equal timestamps keep insertion order.
    """
    return sorted([*history, record], key=_recorded_key)


def recent_weights(history: Iterable[WeightRecord], limit: int = 7) -> List[WeightRecord]:
    """The last ``limit`` weigh-ins, oldest first, for chart windows."""
    ordered = sorted(history, key=_recorded_key)
    return ordered[-limit:] if limit > 0 else []


def weight_change(history: Iterable[WeightRecord]) -> Optional[float]:
    """Latest minus first recorded weight, or None with fewer than two records."""
    ordered = [r for r in sorted(history, key=_recorded_key) if r.recorded_at is not None]
    if len(ordered) < 2:
        return None
    return ordered[-1].weight - ordered[0].weight
