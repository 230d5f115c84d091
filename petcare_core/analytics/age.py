# =============================================================================
# petcare_core/analytics/age.py
# Pet age from a calendar birth date
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from petcare_core.models.dates import calendar_date_of


@dataclass(frozen=True)
class Age:
    years: int
    months: int

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months


def calculate_age(birth_date: date, now: Union[date, datetime]) -> Age:
    """
    Whole years and remaining whole months between birth and now.

    Both ends are compared as UTC calendar dates, so the anniversary day
    counts as the full year. A birth date after ``now`` gives a zero age.
    """
    today = calendar_date_of(now) if isinstance(now, datetime) else now
    if birth_date > today:
        return Age(0, 0)
    delta = relativedelta(today, birth_date)
    return Age(delta.years, delta.months)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_age(age: Age) -> str:
    """
    "11 months", "1 year", "1 year, 1 month", "2 years, 3 months"
    """
    if age.years < 1:
        return _plural(age.months, "month")
    if age.months == 0:
        return _plural(age.years, "year")
    return f"{_plural(age.years, 'year')}, {_plural(age.months, 'month')}"


def age_label(birth_date: date, now: Union[date, datetime]) -> str:
    return format_age(calculate_age(birth_date, now))
