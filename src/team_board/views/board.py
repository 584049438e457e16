# src/team_board/views/board.py

"""
Board projection.

Filters the task list by assignee / status / title and partitions what is left
into the three workflow columns, keeping store order inside each column.
Nothing is cached: every call re-derives the full partition.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date

from ..store.models import Priority, Task, TaskStatus, TeamMember
from ..store.task_api import checklist_progress
from .urgency import Urgency, classify

ALL = "all"
COLUMNS: tuple[TaskStatus, ...] = (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE)


def is_wildcard(value: object) -> bool:
    return isinstance(value, str) and value.strip().lower() == ALL


@dataclass(frozen=True, slots=True)
class BoardFilter:
    """`assignee_id` / `status` accept the wildcard "all" (any case); an empty title matches everything."""

    assignee_id: str = ALL
    status: TaskStatus | str = ALL
    title_substring: str = ""

    def matches(self, task: Task) -> bool:
        if not is_wildcard(self.assignee_id) and task.assignee_id != self.assignee_id:
            return False
        if not is_wildcard(self.status) and task.status != TaskStatus.parse(self.status):
            return False
        return self.title_substring.casefold() in task.title.casefold()


@dataclass(frozen=True, slots=True)
class TaskCard:
    task: Task
    urgency: Urgency
    assignee: TeamMember | None
    checklist_progress: str | None
    has_voice_note: bool
    has_attachments: bool

    @property
    def priority(self) -> Priority:
        return self.task.priority


@dataclass(frozen=True, slots=True)
class BoardView:
    columns: dict[TaskStatus, tuple[TaskCard, ...]]

    def counts(self) -> dict[TaskStatus, int]:
        return {status: len(cards) for status, cards in self.columns.items()}

    @property
    def total(self) -> int:
        return sum(len(cards) for cards in self.columns.values())

    def tasks(self, status: TaskStatus) -> tuple[Task, ...]:
        return tuple(card.task for card in self.columns[status])


def make_card(task: Task, today: date, member_of: Callable[[str], TeamMember | None]) -> TaskCard:
    return TaskCard(
        task=task,
        urgency=classify(task.due_date, today),
        assignee=member_of(task.assignee_id),
        checklist_progress=checklist_progress(task),
        has_voice_note=bool(task.voice_note_ref),
        has_attachments=bool(task.attachments),
    )


def project_board(
    tasks: Iterable[Task],
    criteria: BoardFilter,
    *,
    today: date,
    member_of: Callable[[str], TeamMember | None] = lambda _id: None,
) -> BoardView:
    matched = [t for t in tasks if criteria.matches(t)]
    columns = {
        status: tuple(make_card(t, today, member_of) for t in matched if t.status == status)
        for status in COLUMNS
    }
    return BoardView(columns=columns)
