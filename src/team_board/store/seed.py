# src/team_board/store/seed.py

"""
Starter fixture for a fresh session.

Two tasks are dated relative to "today" so the board always shows one due-soon
and one overdue card; the rest use fixed July 2024 dates.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from .entity_store import EntityStore
from .models import (
    MENTOR_ID,
    Attachment,
    ChecklistItem,
    Feedback,
    Priority,
    Task,
    TaskStatus,
    TeamMember,
)

logger = logging.getLogger(__name__)


def _avatar(member_id: str) -> str:
    return f"https://i.pravatar.cc/40?u={member_id}"


SEED_TEAM: tuple[TeamMember, ...] = (
    TeamMember(id="aarav", name="Aarav", avatar_ref=_avatar("aarav")),
    TeamMember(id="ria", name="Ria", avatar_ref=_avatar("ria")),
    TeamMember(id="karan", name="Karan", avatar_ref=_avatar("karan")),
)


def seed_tasks(today: date) -> list[Task]:
    return [
        Task(
            id="task-1",
            title="Setup GitHub repository",
            status=TaskStatus.DONE,
            assignee_id="aarav",
            due_date=date(2024, 7, 20),
            priority=Priority.HIGH,
        ),
        Task(
            id="task-2",
            title="Design initial UI mockups",
            status=TaskStatus.IN_PROGRESS,
            assignee_id="ria",
            due_date=today + timedelta(days=2),
            priority=Priority.MEDIUM,
            checklist=(
                ChecklistItem(id="cl-1", text="Wireframe homepage", completed=True),
                ChecklistItem(id="cl-2", text="Design task cards", completed=False),
            ),
            attachments=(
                Attachment(id="att-1", name="style_guide.pdf", content_ref="#", mime_type="application/pdf"),
            ),
        ),
        Task(
            id="task-3",
            title="Develop frontend components",
            status=TaskStatus.TODO,
            assignee_id="karan",
            due_date=date(2024, 7, 25),
            priority=Priority.HIGH,
        ),
        Task(
            id="task-4",
            title="Integrate Google Docs API",
            status=TaskStatus.TODO,
            assignee_id="aarav",
            due_date=date(2024, 7, 28),
            priority=Priority.LOW,
        ),
        Task(
            id="task-5",
            title="Weekly Timesheet Automation",
            status=TaskStatus.IN_PROGRESS,
            assignee_id="ria",
            due_date=today - timedelta(days=2),
            priority=Priority.HIGH,
        ),
        Task(
            id="task-6",
            title="Schedule standup meetings",
            status=TaskStatus.DONE,
            assignee_id="karan",
            due_date=date(2024, 7, 19),
            priority=Priority.MEDIUM,
        ),
    ]


def seed_feedback() -> list[Feedback]:
    return [
        Feedback(
            id="fb-1",
            from_id=MENTOR_ID,
            to_id="aarav",
            text="Great progress on the repo setup. Keep it up!",
            date=date(2024, 7, 21),
        ),
        Feedback(
            id="fb-2",
            from_id="ria",
            to_id="karan",
            text="Peer Review: The components look clean and well-structured.",
            date=date(2024, 7, 23),
        ),
        Feedback(
            id="fb-3",
            from_id="karan",
            to_id="ria",
            text="The UI mockups are looking fantastic.",
            date=date(2024, 7, 22),
        ),
    ]


def build_seeded_store(today: date, **store_kwargs) -> EntityStore:
    """Team + starter tasks + starter feedback; no identity, no notifications."""
    store = EntityStore(SEED_TEAM, **store_kwargs)
    store.load(tasks=seed_tasks(today), feedback=seed_feedback())
    logger.info("Seeded store: team=%d tasks=%d feedback=%d", len(store.team()), len(store.tasks()), len(store.feedback()))
    return store
