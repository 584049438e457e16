# tests/test_board_view.py

from __future__ import annotations

from datetime import date

import pytest

from team_board.store.entity_store import EntityStore
from team_board.store.models import TaskStatus
from team_board.views.board import COLUMNS, BoardFilter, project_board
from team_board.views.urgency import Urgency


def _view(store: EntityStore, today: date, **criteria):
    return project_board(store.tasks(), BoardFilter(**criteria), today=today, member_of=store.member)


def test_wildcard_filter_partitions_everything(store: EntityStore, today: date) -> None:
    view = _view(store, today)

    assert view.total == len(store.tasks())
    assert view.counts() == {TaskStatus.TODO: 2, TaskStatus.IN_PROGRESS: 2, TaskStatus.DONE: 2}
    for status in COLUMNS:
        assert all(t.status == status for t in view.tasks(status))


def test_columns_keep_store_order(store: EntityStore, today: date) -> None:
    view = _view(store, today)
    assert [t.id for t in view.tasks(TaskStatus.TODO)] == ["task-3", "task-4"]
    assert [t.id for t in view.tasks(TaskStatus.DONE)] == ["task-1", "task-6"]


@pytest.mark.parametrize("needle", ["mockup", "MOCKUP", "Mockups", "ui mock"])
def test_title_filter_is_case_insensitive(store: EntityStore, today: date, needle: str) -> None:
    view = _view(store, today, title_substring=needle)
    assert view.total == 1
    assert view.tasks(TaskStatus.IN_PROGRESS)[0].title == "Design initial UI mockups"


def test_assignee_and_status_filters(store: EntityStore, today: date) -> None:
    by_ria = _view(store, today, assignee_id="ria")
    assert {t.id for s in COLUMNS for t in by_ria.tasks(s)} == {"task-2", "task-5"}

    done = _view(store, today, status=TaskStatus.DONE)
    assert done.counts() == {TaskStatus.TODO: 0, TaskStatus.IN_PROGRESS: 0, TaskStatus.DONE: 2}

    combined = _view(store, today, assignee_id="karan", status="Done", title_substring="standup")
    assert [t.id for t in combined.tasks(TaskStatus.DONE)] == ["task-6"]
    assert combined.total == 1


def test_filter_with_no_matches_yields_empty_columns(store: EntityStore, today: date) -> None:
    view = _view(store, today, assignee_id="aarav", status=TaskStatus.IN_PROGRESS)
    assert view.total == 0
    assert set(view.columns) == set(COLUMNS)


def test_projection_reflects_store_changes(store: EntityStore, today: date) -> None:
    store.set_task_status("task-3", TaskStatus.DONE)
    view = _view(store, today)
    assert view.counts()[TaskStatus.DONE] == 3
    assert [t.id for t in view.tasks(TaskStatus.DONE)] == ["task-1", "task-3", "task-6"]


def test_cards_carry_indicators(store: EntityStore, today: date) -> None:
    view = _view(store, today)
    cards = {c.task.id: c for s in COLUMNS for c in view.columns[s]}

    mockups = cards["task-2"]
    assert mockups.urgency == Urgency.DUE_SOON
    assert mockups.checklist_progress == "1/2"
    assert mockups.has_attachments is True
    assert mockups.has_voice_note is False
    assert mockups.assignee is not None and mockups.assignee.name == "Ria"

    assert cards["task-5"].urgency == Urgency.OVERDUE
    assert cards["task-4"].checklist_progress is None


@pytest.mark.parametrize("wildcard", ["all", "All", "ALL", " all "])
def test_wildcard_is_case_insensitive(store: EntityStore, today: date, wildcard: str) -> None:
    view = _view(store, today, assignee_id=wildcard, status=wildcard)
    assert view.total == len(store.tasks())
