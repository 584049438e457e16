# src/team_board/store/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

MENTOR_ID = "Mentor"
GUEST_NAME = "Guest"


class TaskStatus(StrEnum):
    """
    Workflow status (board column).

    Notes:
    - values are the user-facing labels; they double as the drag-drop target ids
    - transitions are unconstrained: any status may follow any other
    """

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        """Accept the label or a loose alias ("todo", "in-progress", "done")."""
        if isinstance(raw, TaskStatus):
            return raw
        key = str(raw).strip().lower().replace("-", " ").replace("_", " ")
        for status in cls:
            if status.value.lower() == key or status.value.lower().replace(" ", "") == key:
                return status
        raise ValueError(f"unknown status: {raw!r}")


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        if isinstance(raw, Priority):
            return raw
        key = str(raw).strip().lower()
        for p in cls:
            if p.value.lower() == key:
                return p
        raise ValueError(f"unknown priority: {raw!r}")


class IdentityKind(StrEnum):
    MEMBER = "member"
    GUEST = "guest"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True, slots=True)
class TeamMember:
    id: str
    name: str
    avatar_ref: str = ""


@dataclass(frozen=True, slots=True)
class ChecklistItem:
    id: str
    text: str
    completed: bool = False


@dataclass(frozen=True, slots=True)
class Attachment:
    """
    File attached to a task.

    `content_ref` is whatever the capture side produced (data URI, blob handle);
    it is stored as-is and never opened.
    """

    id: str
    name: str
    content_ref: str
    mime_type: str


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    assignee_id: str
    due_date: date
    priority: Priority = Priority.MEDIUM
    voice_note_ref: str | None = None
    checklist: tuple[ChecklistItem, ...] = ()
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """
    Everything about a task except its id.

    Used both for "create task" and for the full-replace "update task".
    Fields are kept loose (str or enum, str or date) because they come straight
    from the UI layer; the store validates and normalizes them.
    """

    title: str
    assignee_id: str
    due_date: date | str | None
    priority: Priority | str = Priority.MEDIUM
    status: TaskStatus | str = TaskStatus.TODO
    voice_note_ref: str | None = None
    checklist: tuple[ChecklistItem, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            title=task.title,
            assignee_id=task.assignee_id,
            due_date=task.due_date,
            priority=task.priority,
            status=task.status,
            voice_note_ref=task.voice_note_ref,
            checklist=task.checklist,
            attachments=task.attachments,
        )


@dataclass(frozen=True, slots=True)
class Feedback:
    """Peer feedback. `from_id` / `to_id` are member ids or the "Mentor" sentinel."""

    id: str
    from_id: str
    to_id: str
    text: str
    date: date


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    message: str
    read: bool = False
    # Who the event was about; listings ignore it unless asked to filter.
    recipient_id: str | None = None


@dataclass(frozen=True, slots=True)
class Identity:
    """Session principal: a team member, the guest, or nobody."""

    kind: IdentityKind
    member: TeamMember | None = field(default=None)

    @classmethod
    def of(cls, member: TeamMember) -> Identity:
        return cls(kind=IdentityKind.MEMBER, member=member)

    @classmethod
    def guest(cls) -> Identity:
        return cls(kind=IdentityKind.GUEST)

    @classmethod
    def anonymous(cls) -> Identity:
        return cls(kind=IdentityKind.ANONYMOUS)

    @property
    def member_id(self) -> str | None:
        return self.member.id if self.member is not None else None

    @property
    def is_member(self) -> bool:
        return self.kind is IdentityKind.MEMBER and self.member is not None

    @property
    def display_name(self) -> str:
        if self.member is not None:
            return self.member.name
        if self.kind is IdentityKind.GUEST:
            return GUEST_NAME
        return ""
