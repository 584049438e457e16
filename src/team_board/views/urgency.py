# src/team_board/views/urgency.py

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

# Inclusive: due today .. today + 3 days is "due soon".
DUE_SOON_DAYS = 3


class Urgency(StrEnum):
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    NORMAL = "normal"


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_until(due: date | datetime, today: date | datetime) -> int:
    """Whole days from today to due, both taken at midnight."""
    return (_as_day(due) - _as_day(today)).days


def classify(due: date | datetime, today: date | datetime) -> Urgency:
    """
    Urgency tier of a due date relative to `today`.

    Time of day is discarded on both sides, so the result depends only on the
    two calendar dates.
    """
    diff = days_until(due, today)
    if diff < 0:
        return Urgency.OVERDUE
    if diff <= DUE_SOON_DAYS:
        return Urgency.DUE_SOON
    return Urgency.NORMAL
