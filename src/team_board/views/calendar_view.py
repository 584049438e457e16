# src/team_board/views/calendar_view.py

"""
Calendar projection.

Buckets tasks by their full due date (not day-of-month), so a task only ever
shows up on the one day of the one month it is due. Each day exposes a short
preview (first two task ids) plus a count of the rest; the full list for a day
is fetched on demand with tasks_due_on().
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from ..store.models import Task

PREVIEW_SIZE = 2


@dataclass(frozen=True, slots=True)
class CalendarDay:
    day: date
    tasks: tuple[Task, ...]

    @property
    def has_tasks(self) -> bool:
        return bool(self.tasks)

    @property
    def preview_ids(self) -> tuple[str, ...]:
        return tuple(t.id for t in self.tasks[:PREVIEW_SIZE])

    @property
    def more_count(self) -> int:
        return max(0, len(self.tasks) - PREVIEW_SIZE)


@dataclass(frozen=True, slots=True)
class CalendarMonth:
    year: int
    month: int
    days: tuple[CalendarDay, ...]

    @property
    def month_name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def leading_blanks(self) -> int:
        """Empty cells before day 1 in a Sunday-first week grid."""
        # calendar.weekday: Monday == 0
        return (calendar.weekday(self.year, self.month, 1) + 1) % 7

    def day(self, day_of_month: int) -> CalendarDay:
        return self.days[day_of_month - 1]


def group_by_due_date(tasks: Iterable[Task]) -> dict[date, list[Task]]:
    buckets: dict[date, list[Task]] = defaultdict(list)
    for t in tasks:
        buckets[t.due_date].append(t)
    return buckets


def project_month(tasks: Iterable[Task], year: int, month: int) -> CalendarMonth:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1..12, got {month}")
    buckets = group_by_due_date(tasks)
    _, n_days = calendar.monthrange(year, month)
    days = tuple(
        CalendarDay(day=d, tasks=tuple(buckets.get(d, ())))
        for d in (date(year, month, i) for i in range(1, n_days + 1))
    )
    return CalendarMonth(year=year, month=month, days=days)


def tasks_due_on(tasks: Iterable[Task], day: date) -> list[Task]:
    return [t for t in tasks if t.due_date == day]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Previous / next month navigation (delta may be negative)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
