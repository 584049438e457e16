# src/team_board/store/task_api.py

from __future__ import annotations

"""
Convenience helpers on top of EntityStore.update_task.

The task form edits checklist items, attachments and the voice note as part of
the task record; each helper reads the current task, builds the changed draft
and performs one full-replace update.
"""

import logging
from dataclasses import replace
from typing import Any

from ..core.errors import NotFoundError, ValidationError
from .entity_store import EntityStore
from .models import Attachment, ChecklistItem, Task, TaskDraft

logger = logging.getLogger(__name__)


def edit_task(store: EntityStore, task_id: str, **changes: Any) -> Task:
    """Update selected fields; the rest are carried over from the stored task."""
    draft = replace(TaskDraft.from_task(store.get_task(task_id)), **changes)
    return store.update_task(task_id, draft)


def add_checklist_item(store: EntityStore, task_id: str, text: str) -> Task:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Checklist item text is required.")
    task = store.get_task(task_id)
    item = ChecklistItem(id=store.new_item_id("cl"), text=text, completed=False)
    return edit_task(store, task_id, checklist=(*task.checklist, item))


def toggle_checklist_item(store: EntityStore, task_id: str, item_id: str) -> Task:
    task = store.get_task(task_id)
    if not any(i.id == item_id for i in task.checklist):
        raise NotFoundError(f"Checklist item {item_id!r} not found on task {task_id!r}.")
    checklist = tuple(
        replace(i, completed=not i.completed) if i.id == item_id else i for i in task.checklist
    )
    return edit_task(store, task_id, checklist=checklist)


def remove_checklist_item(store: EntityStore, task_id: str, item_id: str) -> Task:
    task = store.get_task(task_id)
    checklist = tuple(i for i in task.checklist if i.id != item_id)
    if len(checklist) == len(task.checklist):
        raise NotFoundError(f"Checklist item {item_id!r} not found on task {task_id!r}.")
    return edit_task(store, task_id, checklist=checklist)


def add_attachment(
    store: EntityStore, task_id: str, *, name: str, content_ref: str, mime_type: str
) -> Task:
    """Store what the attachment picker produced; the payload is never opened."""
    if not name or not content_ref:
        raise ValidationError("Attachment needs a name and a content reference.")
    task = store.get_task(task_id)
    att = Attachment(
        id=store.new_item_id("att"),
        name=name,
        content_ref=content_ref,
        mime_type=mime_type or "application/octet-stream",
    )
    logger.debug("Attachment %s (%s) added to task %s", att.name, att.mime_type, task_id)
    return edit_task(store, task_id, attachments=(*task.attachments, att))


def remove_attachment(store: EntityStore, task_id: str, attachment_id: str) -> Task:
    task = store.get_task(task_id)
    attachments = tuple(a for a in task.attachments if a.id != attachment_id)
    if len(attachments) == len(task.attachments):
        raise NotFoundError(f"Attachment {attachment_id!r} not found on task {task_id!r}.")
    return edit_task(store, task_id, attachments=attachments)


def set_voice_note(store: EntityStore, task_id: str, content_ref: str | None) -> Task:
    """None (recording produced nothing / was discarded) clears the field."""
    return edit_task(store, task_id, voice_note_ref=content_ref or None)


def checklist_progress(task: Task) -> str | None:
    """Progress as "done/total", or None when the task has no checklist."""
    if not task.checklist:
        return None
    done = sum(1 for i in task.checklist if i.completed)
    return f"{done}/{len(task.checklist)}"
