"""Week arithmetic for the planning grid.

The grid stores a block as (week_start, day_of_week) where week_start is the
ISO Monday and day_of_week runs 0 (Monday) to 4 (Friday).
"""

import math
from datetime import date, timedelta

DAY_ABBREVIATIONS = ["mon", "tue", "wed", "thu", "fri"]

# Weekday names as stored on employee profiles, indexed by date.weekday()
WEEKDAY_NAMES = {
    0: ("monday", "maandag"),
    1: ("tuesday", "dinsdag"),
    2: ("wednesday", "woensdag"),
    3: ("thursday", "donderdag"),
    4: ("friday", "vrijdag"),
    5: ("saturday", "zaterdag"),
    6: ("sunday", "zondag"),
}

THURSDAY = 3


def monday_of(day: date) -> date:
    """Monday of the ISO week containing ``day`` (Sunday is day 7 of its week)."""
    return day - timedelta(days=day.isoweekday() - 1)


def is_weekend(day: date) -> bool:
    return day.isoweekday() >= 6


def day_index(day: date) -> int:
    """Grid column for ``day``: Monday=0 ... Friday=4."""
    if is_weekend(day):
        raise ValueError(f"{day.isoformat()} is a weekend day and has no grid column")
    return day.isoweekday() - 1


def next_weekday(day: date) -> date:
    """``day`` itself, or the following Monday when it falls in a weekend."""
    while is_weekend(day):
        day += timedelta(days=1)
    return day


def weekday_matches(day: date, name: str) -> bool:
    """True if ``name`` (English or Dutch, any case) names the weekday of ``day``."""
    return name.strip().lower() in WEEKDAY_NAMES[day.weekday()]


def working_days_between(start: date, end: date) -> int:
    """Number of Mon-Fri dates in ``[start, end)``."""
    count = 0
    current = start
    while current < end:
        if not is_weekend(current):
            count += 1
        current += timedelta(days=1)
    return count


def format_hour(value: float) -> str:
    """Decimal hours to ``HH:MM`` (12.5 -> "12:30")."""
    hours = math.floor(value)
    minutes = round((value - hours) * 60)
    return f"{hours:02d}:{minutes:02d}"
