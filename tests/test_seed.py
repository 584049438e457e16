# tests/test_seed.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from team_board.core.errors import ValidationError
from team_board.store.models import MENTOR_ID, Identity, TaskStatus
from team_board.store.seed import SEED_TEAM, build_seeded_store, seed_feedback, seed_tasks

TODAY = date(2024, 7, 24)


def test_seeded_store_contents() -> None:
    store = build_seeded_store(TODAY)

    assert [m.id for m in store.team()] == ["aarav", "ria", "karan"]
    assert [t.id for t in store.tasks()] == [f"task-{i}" for i in range(1, 7)]
    assert [f.id for f in store.feedback()] == ["fb-1", "fb-2", "fb-3"]
    assert store.notifications() == ()
    assert store.identity == Identity.anonymous()


def test_relative_dates_follow_today() -> None:
    later = TODAY + timedelta(days=40)
    tasks = {t.id: t for t in seed_tasks(later)}

    assert tasks["task-2"].due_date == later + timedelta(days=2)
    assert tasks["task-5"].due_date == later - timedelta(days=2)
    assert tasks["task-3"].due_date == date(2024, 7, 25)


def test_seed_shape() -> None:
    tasks = seed_tasks(TODAY)
    assert {t.status for t in tasks} == set(TaskStatus)
    assert all(t.assignee_id in {m.id for m in SEED_TEAM} for t in tasks)
    assert seed_feedback()[0].from_id == MENTOR_ID


def test_avatar_refs() -> None:
    assert all(m.avatar_ref.endswith(f"?u={m.id}") for m in SEED_TEAM)


def test_loading_twice_is_rejected() -> None:
    store = build_seeded_store(TODAY)
    with pytest.raises(ValidationError):
        store.load(tasks=seed_tasks(TODAY))
