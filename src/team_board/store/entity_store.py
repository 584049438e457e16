# src/team_board/store/entity_store.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, datetime

from ..core.errors import BoardError, ForbiddenError, NotFoundError, ValidationError
from ..core.ports import Clock
from . import notifications as trigger
from .models import (
    MENTOR_ID,
    Feedback,
    Identity,
    IdentityKind,
    Notification,
    Priority,
    Task,
    TaskDraft,
    TaskStatus,
    TeamMember,
)

logger = logging.getLogger(__name__)


class SystemClock:
    def now(self) -> datetime:
        return datetime.now().astimezone()


def parse_due_date(raw: date | str | None) -> date:
    """Normalize a due date to a plain calendar date (time of day is discarded)."""
    if raw is None:
        raise ValidationError("Due date is required.")
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        raise ValidationError("Due date is required.")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Due date must be YYYY-MM-DD, got {text!r}.") from None


class EntityStore:
    """
    In-memory entity store for one session.

    The store owns every collection and is the only writer:
    - records are frozen dataclasses; a mutation swaps in a new record
    - readers get tuples, so nothing mutable leaks out
    - every check runs before the write; an error means the store is unchanged

    Ids are "<prefix>-<n>" with a per-prefix counter that skips ids already
    present (seeded records), so they never collide within the session.
    """

    def __init__(self, team: Iterable[TeamMember] = (), *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()
        self._team: dict[str, TeamMember] = {m.id: m for m in team}
        self._tasks: dict[str, Task] = {}
        self._feedback: dict[str, Feedback] = {}
        self._notifications: list[Notification] = []
        self._identity = Identity.anonymous()
        self._counters: dict[str, itertools.count[int]] = {}
        logger.info("EntityStore ready team=%d", len(self._team))

    # ---- low-level helpers ----

    def _next_id(self, prefix: str, taken: Iterable[str]) -> str:
        counter = self._counters.setdefault(prefix, itertools.count(1))
        existing = set(taken)
        while True:
            candidate = f"{prefix}-{next(counter)}"
            if candidate not in existing:
                return candidate

    def new_item_id(self, prefix: str) -> str:
        """
        Fresh id for a checklist item ("cl") or attachment ("att") across all tasks.

        Only members edit tasks, so nobody else consumes ids.
        """
        try:
            self._require_member("edit tasks")
        except BoardError as e:
            self._rejected("new_item_id", e)
            raise
        taken = [
            item.id
            for t in self._tasks.values()
            for item in itertools.chain(t.checklist, t.attachments)
        ]
        return self._next_id(prefix, taken)

    def _require_member(self, action: str) -> TeamMember:
        if not self._identity.is_member:
            who = "guests" if self._identity.kind is IdentityKind.GUEST else "signed-out users"
            raise ForbiddenError(f"Cannot {action}: {who} can only view the board.")
        member = self._identity.member
        if member is None:
            raise ForbiddenError(f"Cannot {action}: no team member is signed in.")
        return member

    def _get_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id!r} not found.")
        return task

    def _validated(self, task_id: str, draft: TaskDraft) -> Task:
        title = (draft.title or "").strip()
        if not title:
            raise ValidationError("Task title is required.")
        if not draft.assignee_id or draft.assignee_id not in self._team:
            raise ValidationError(f"Unknown assignee: {draft.assignee_id!r}.")
        due = parse_due_date(draft.due_date)
        try:
            status = TaskStatus.parse(draft.status)
            priority = Priority.parse(draft.priority)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        return Task(
            id=task_id,
            title=title,
            status=status,
            assignee_id=draft.assignee_id,
            due_date=due,
            priority=priority,
            voice_note_ref=draft.voice_note_ref or None,
            checklist=tuple(draft.checklist),
            attachments=tuple(draft.attachments),
        )

    def _notify(self, event: trigger.NotificationEvent | None) -> Notification | None:
        if event is None:
            return None
        note = Notification(
            id=self._next_id("notif", (n.id for n in self._notifications)),
            message=event.message,
            read=False,
            recipient_id=event.recipient_id,
        )
        self._notifications.append(note)
        logger.debug("Notification queued id=%s recipient=%s", note.id, note.recipient_id)
        return note

    def _rejected(self, op: str, err: BoardError) -> None:
        logger.info("%s rejected (%s): %s", op, err.kind, err)

    # ---- identity ----

    @property
    def identity(self) -> Identity:
        return self._identity

    def login(self, identity: Identity) -> None:
        """Set the session identity. Supplied by the login screen; never re-validated."""
        self._identity = identity
        logger.info("Session identity: %s %s", identity.kind.value, identity.member_id or "")

    def logout(self) -> None:
        self._identity = Identity.anonymous()

    # ---- reads (immutable snapshots) ----

    def team(self) -> tuple[TeamMember, ...]:
        return tuple(self._team.values())

    def member(self, member_id: str) -> TeamMember | None:
        return self._team.get(member_id)

    def display_name(self, identity_id: str) -> str | None:
        if identity_id == MENTOR_ID:
            return MENTOR_ID
        m = self._team.get(identity_id)
        return m.name if m else None

    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks.values())

    def get_task(self, task_id: str) -> Task:
        return self._get_task(task_id)

    def feedback(self) -> tuple[Feedback, ...]:
        return tuple(self._feedback.values())

    def get_feedback(self, feedback_id: str) -> Feedback:
        fb = self._feedback.get(feedback_id)
        if fb is None:
            raise NotFoundError(f"Feedback {feedback_id!r} not found.")
        return fb

    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    # ---- seeding ----

    def load(self, *, tasks: Sequence[Task] = (), feedback: Sequence[Feedback] = ()) -> None:
        """
        Insert prebuilt records (starter fixture).

        Bypasses identity checks, since seeded feedback may come from "Mentor",
        but still refuses duplicate ids and unknown assignees.
        """
        seen: set[str] = set(self._tasks)
        for t in tasks:
            if t.id in seen:
                raise ValidationError(f"Duplicate task id {t.id!r}.")
            if t.assignee_id not in self._team:
                raise ValidationError(f"Unknown assignee: {t.assignee_id!r}.")
            seen.add(t.id)
        seen = set(self._feedback)
        for fb in feedback:
            if fb.id in seen:
                raise ValidationError(f"Duplicate feedback id {fb.id!r}.")
            seen.add(fb.id)

        self._tasks.update((t.id, t) for t in tasks)
        self._feedback.update((fb.id, fb) for fb in feedback)
        logger.debug("Loaded tasks=%d feedback=%d", len(tasks), len(feedback))

    # ---- task mutations ----

    def create_task(self, draft: TaskDraft) -> tuple[Task, Notification | None]:
        """
        Validate and insert a new task with a fresh id.

        Returns the stored task and the "assigned to you" notification, if one was
        queued (only when the assignee is not the current identity).
        """
        try:
            self._require_member("create tasks")
            task = self._validated("", draft)
        except BoardError as e:
            self._rejected("create_task", e)
            raise

        task = replace(task, id=self._next_id("task", self._tasks))
        self._tasks[task.id] = task
        logger.debug("Task created id=%s status=%s assignee=%s", task.id, task.status, task.assignee_id)
        return task, self._notify(trigger.on_task_created(task, self._identity))

    def update_task(self, task_id: str, draft: TaskDraft) -> Task:
        """Full replace of every field except the id."""
        try:
            self._require_member("edit tasks")
            self._get_task(task_id)
            task = self._validated(task_id, draft)
        except BoardError as e:
            self._rejected("update_task", e)
            raise

        self._tasks[task_id] = task
        logger.debug("Task updated id=%s", task_id)
        return task

    def set_task_status(self, task_id: str, status: TaskStatus | str) -> Task:
        """
        Status-only mutation (drag-drop path).

        Any status may follow any other, including itself; repeating a call is a no-op.
        Moving is editing: guests and signed-out sessions only view the board, so
        they get ForbiddenError here like every other task mutation.
        """
        try:
            self._require_member("move tasks")
            current = self._get_task(task_id)
            try:
                new_status = TaskStatus.parse(status)
            except ValueError as e:
                raise ValidationError(str(e)) from None
        except BoardError as e:
            self._rejected("set_task_status", e)
            raise

        task = replace(current, status=new_status)
        self._tasks[task_id] = task
        logger.debug("Task status id=%s %s -> %s", task_id, current.status, new_status)
        return task

    # ---- feedback mutations ----

    def submit_feedback(
        self, to_id: str, text: str, *, from_id: str | None = None
    ) -> tuple[Feedback, Notification | None]:
        """
        Record feedback authored by the current identity, dated today.

        `from_id`, when given, must be the current identity: nobody authors on
        another's behalf. The recipient id is not checked against the team.
        """
        try:
            author = self._require_member("submit feedback")
            if from_id is not None and from_id != author.id:
                raise ForbiddenError("Feedback can only be submitted as yourself.")
            if not to_id or not to_id.strip():
                raise ValidationError("Feedback recipient is required.")
            if not text or not text.strip():
                raise ValidationError("Feedback text is required.")
        except BoardError as e:
            self._rejected("submit_feedback", e)
            raise

        fb = Feedback(
            id=self._next_id("fb", self._feedback),
            from_id=author.id,
            to_id=to_id.strip(),
            text=text,
            date=self._clock.now().date(),
        )
        self._feedback[fb.id] = fb
        logger.debug("Feedback submitted id=%s from=%s to=%s", fb.id, fb.from_id, fb.to_id)
        return fb, self._notify(trigger.on_feedback_submitted(fb, self._identity, self.display_name))

    def edit_feedback(self, feedback_id: str, new_text: str) -> Feedback:
        """Replace the text only; id, author, recipient and date stay as they were."""
        try:
            current = self.get_feedback(feedback_id)
            if self._identity.member_id is None or self._identity.member_id != current.from_id:
                raise ForbiddenError("Only the author can edit this feedback.")
            if not new_text or not new_text.strip():
                raise ValidationError("Feedback text is required.")
        except BoardError as e:
            self._rejected("edit_feedback", e)
            raise

        fb = replace(current, text=new_text)
        self._feedback[feedback_id] = fb
        logger.debug("Feedback edited id=%s", feedback_id)
        return fb

    # ---- notifications ----

    def clear_notifications(self) -> None:
        """Mark everything read. Nothing is removed."""
        self._notifications = [n if n.read else replace(n, read=True) for n in self._notifications]
