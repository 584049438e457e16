# src/team_board/views/timesheet.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..store.models import Feedback, Task, TaskStatus

WINDOW = timedelta(days=7)


@dataclass(frozen=True, slots=True)
class Timesheet:
    completed_tasks: tuple[Task, ...]
    feedback: tuple[Feedback, ...]


def _start_of(day: date, like: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=like.tzinfo)


def in_window(day: date, now: datetime) -> bool:
    """
    Trailing-week check: the day (taken at midnight) is not earlier than now - 7 days.

    No upper bound: future dates are in window.
    """
    return _start_of(day, now) >= now - WINDOW


def weekly_timesheet(
    tasks: Iterable[Task],
    feedback: Iterable[Feedback],
    identity_id: str | None,
    now: datetime,
) -> Timesheet:
    """
    Done tasks assigned to `identity_id` and feedback sent or received by it,
    both limited to the trailing week. No identity means an empty timesheet.
    """
    if not identity_id:
        return Timesheet(completed_tasks=(), feedback=())

    done = tuple(
        t
        for t in tasks
        if t.status == TaskStatus.DONE and t.assignee_id == identity_id and in_window(t.due_date, now)
    )
    fb = tuple(
        f
        for f in feedback
        if (f.from_id == identity_id or f.to_id == identity_id) and in_window(f.date, now)
    )
    return Timesheet(completed_tasks=done, feedback=fb)
