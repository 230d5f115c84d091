# =============================================================================
# expenses.py
# Expense Aggregates per Month and Category
# Totals are float64 sums; rounding happens only in format_amount()
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Union

import pandas as pd

from petcare_core.models import Expense
from petcare_core.models.dates import calendar_date_of

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class ExpenseSummary:
    """All-time and current-month totals plus per-category totals."""
    total: float = 0.0
    current_month_total: float = 0.0
    category_totals: Dict[str, float] = field(default_factory=dict)


@dataclass
class CategoryShare:
    """One slice of the category breakdown."""
    category: str
    amount: float
    share: float  # fraction of the all-time total, 0..1


# =============================================================================
# HELPERS
# =============================================================================

def _to_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    rows = [
        {"category": e.category, "amount": float(e.amount), "date": e.date}
        for e in expenses
    ]
    df = pd.DataFrame(rows, columns=["category", "amount", "date"])
    df["amount"] = df["amount"].astype("float64")
    return df


def _as_date(value: Union[date, datetime]) -> date:
    return calendar_date_of(value) if isinstance(value, datetime) else value


def _month_bounds(today: date) -> tuple:
    start = today.replace(day=1)
    end = (pd.Timestamp(start) + pd.offsets.MonthEnd(0)).date()
    return start, end


def _sum_between(df: pd.DataFrame, start: date, end: date) -> float:
    dated = df[df["date"].notna()]
    mask = dated["date"].map(lambda d: start <= d <= end).astype(bool)
    return float(dated.loc[mask, "amount"].sum())


# =============================================================================
# AGGREGATES
# =============================================================================

def summarize_expenses(expenses: Iterable[Expense], today: Union[date, datetime]) -> ExpenseSummary:
    """
    Totals for the expenses screen.

    Args:
        expenses: Expense records of one pet
        today: Reference day; its calendar month is the "current month"

    Returns:
        ExpenseSummary with unrounded float totals
    """
    df = _to_frame(expenses)
    if df.empty:
        return ExpenseSummary()

    start, end = _month_bounds(_as_date(today))
    by_category = df.groupby("category", sort=True)["amount"].sum()

    return ExpenseSummary(
        total=float(df["amount"].sum()),
        current_month_total=_sum_between(df, start, end),
        category_totals={str(k): float(v) for k, v in by_category.items()},
    )


def window_total(expenses: Iterable[Expense], start: date, end: date) -> float:
    """Sum of expenses dated within [start, end], both inclusive."""
    df = _to_frame(expenses)
    if df.empty:
        return 0.0
    return _sum_between(df, start, end)


def monthly_totals(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Totals per "YYYY-MM", oldest month first. Undated expenses are skipped."""
    df = _to_frame(expenses)
    df = df[df["date"].notna()]
    if df.empty:
        return {}

    months = pd.to_datetime(df["date"]).dt.to_period("M").astype(str)
    totals = df.groupby(months)["amount"].sum().sort_index()
    return {str(k): float(v) for k, v in totals.items()}


def category_breakdown(expenses: Iterable[Expense]) -> List[CategoryShare]:
    """
    Categories with a non-zero total, largest first, with their share of
    the all-time total for proportional display.
    """
    df = _to_frame(expenses)
    if df.empty:
        return []

    totals = df.groupby("category")["amount"].sum()
    totals = totals[totals > 0].sort_values(ascending=False, kind="stable")
    grand_total = float(totals.sum())
    if grand_total <= 0:
        return []

    return [
        CategoryShare(category=str(category), amount=float(amount), share=float(amount) / grand_total)
        for category, amount in totals.items()
    ]


def format_amount(amount: float, currency: str = "USD") -> str:
    """Round to cents for display: 1234.5 -> "$1,234.50"."""
    symbol = CURRENCY_SYMBOLS.get(currency)
    text = f"{amount:,.2f}"
    return f"{symbol}{text}" if symbol else f"{currency} {text}"
