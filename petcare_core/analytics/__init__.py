# =============================================================================
# petcare_core/analytics/__init__.py
# Pure derived views over store collections
# =============================================================================

from .age import Age, calculate_age, format_age, age_label
from .visits import is_upcoming, partition_visits, next_visit
from .expenses import (
    ExpenseSummary,
    CategoryShare,
    summarize_expenses,
    window_total,
    monthly_totals,
    category_breakdown,
    format_amount,
)
from .weights import insert_chronological, recent_weights, weight_change
from .care import active_medications, expiring_documents

__all__ = [
    "Age", "calculate_age", "format_age", "age_label",
    "is_upcoming", "partition_visits", "next_visit",
    "ExpenseSummary", "CategoryShare", "summarize_expenses", "window_total",
    "monthly_totals", "category_breakdown", "format_amount",
    "insert_chronological", "recent_weights", "weight_change",
    "active_medications", "expiring_documents",
]
