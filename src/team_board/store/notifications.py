# src/team_board/store/notifications.py

from __future__ import annotations

"""
Notification trigger.

Two mutations produce events:
- create task      -> "New task "<title>" assigned to you." (assignee is not the current identity)
- submit feedback  -> "<from name> left feedback for you." (to_id is the current identity)

One mutation resolves them: clearing marks everything read. Nothing is ever
deleted or marked unread again.

The trigger functions are pure: they look at the mutation outcome and the
identity active at that moment and return an event (or None). The store turns
events into Notification records.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .models import Feedback, Identity, Notification, Task

logger = logging.getLogger(__name__)

UNKNOWN_SENDER_NAME = "Someone"


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    message: str
    recipient_id: str | None


def on_task_created(task: Task, identity: Identity) -> NotificationEvent | None:
    if task.assignee_id == identity.member_id:
        return None
    return NotificationEvent(
        message=f'New task "{task.title}" assigned to you.',
        recipient_id=task.assignee_id,
    )


def on_feedback_submitted(
    feedback: Feedback,
    identity: Identity,
    name_of: Callable[[str], str | None],
) -> NotificationEvent | None:
    """
    Evaluated on the sender's side at submit time: only fires when the
    feedback is addressed to whoever is active right now.
    """
    if identity.member_id is None or feedback.to_id != identity.member_id:
        return None
    from_name = name_of(feedback.from_id) or UNKNOWN_SENDER_NAME
    return NotificationEvent(
        message=f"{from_name} left feedback for you.",
        recipient_id=feedback.to_id,
    )


def unread_count(notifications: Iterable[Notification]) -> int:
    return sum(1 for n in notifications if not n.read)


def newest_first(notifications: Sequence[Notification]) -> list[Notification]:
    return list(reversed(notifications))


def for_recipient(notifications: Iterable[Notification], recipient_id: str | None) -> list[Notification]:
    """Recipient-addressed listing (the default listing shows everything to everyone)."""
    if recipient_id is None:
        return []
    return [n for n in notifications if n.recipient_id == recipient_id]


class NotificationPanel:
    """
    Open/closed state of the notification dropdown.

    Opening the panel while something is unread clears notifications exactly once
    for that transition; closing it, or opening with nothing unread, does not.
    """

    def __init__(self, read_notifications: Callable[[], Sequence[Notification]], clear: Callable[[], None]) -> None:
        self._read = read_notifications
        self._clear = clear
        self.is_open = False

    def toggle(self) -> list[Notification]:
        """Flip the panel; returns what it shows (newest first), empty when closed."""
        opening = not self.is_open
        self.is_open = opening
        if not opening:
            return []

        current = self._read()
        if unread_count(current) > 0:
            self._clear()
            logger.debug("Notification panel opened; cleared %d unread.", unread_count(current))
        return newest_first(self._read())
