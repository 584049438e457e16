# src/team_board/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..core.errors import BoardError, ValidationError
from ..core.state import AppState
from ..store import task_api
from ..store.entity_store import parse_due_date
from ..store.models import Task, TaskDraft, TaskStatus
from ..store.notifications import unread_count
from ..views.board import ALL, COLUMNS, BoardFilter, TaskCard, is_wildcard, project_board
from ..views.calendar_view import CalendarMonth, project_month, shift_month, tasks_due_on
from ..views.feedback_list import can_edit_feedback, feedback_newest_first
from ..views.timesheet import weekly_timesheet
from ..views.urgency import Urgency
from .bootstrap import resolve_identity

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry; the console connector feeds it one line at a time."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Rejected mutations come back as their explanation; the store is unchanged.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        try:
            return handler(state, args)
        except BoardError as e:
            return f"Not done: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering helpers ----


def _name(state: AppState, identity_id: str) -> str:
    return state.store.display_name(identity_id) or identity_id


def _card_line(card: TaskCard) -> str:
    flags = []
    if card.urgency is not Urgency.NORMAL:
        flags.append(card.urgency.value)
    if card.has_voice_note:
        flags.append("voice")
    if card.checklist_progress:
        flags.append(f"checklist {card.checklist_progress}")
    if card.has_attachments:
        flags.append("attachments")
    who = card.assignee.name if card.assignee else card.task.assignee_id
    extra = f" [{', '.join(flags)}]" if flags else ""
    return (
        f"  {card.task.id}: {card.task.title} ({card.priority.value}, {who}, "
        f"due {card.task.due_date.isoformat()}){extra}"
    )


def _task_detail(state: AppState, task: Task) -> str:
    lines = [
        f"{task.id}: {task.title}",
        f"  status: {task.status.value}   priority: {task.priority.value}",
        f"  assignee: {_name(state, task.assignee_id)}   due: {task.due_date.isoformat()}",
    ]
    if task.voice_note_ref:
        lines.append("  voice note: yes")
    for item in task.checklist:
        lines.append(f"  [{'x' if item.completed else ' '}] {item.id} {item.text}")
    for att in task.attachments:
        lines.append(f"  attachment {att.id}: {att.name} ({att.mime_type})")
    return "\n".join(lines)


def _split_key_values(args: list[str]) -> dict[str, str]:
    """Parse "a=1 b=two words" into {"a": "1", "b": "two words"}; bare words extend the previous value."""
    out: dict[str, str] = {}
    key: str | None = None
    for a in args:
        if "=" in a:
            key, v = a.split("=", 1)
            key = key.strip().lower()
            out[key] = v.strip()
        elif key is None:
            raise ValidationError(f"Expected key=value, got {a!r}.")
        else:
            out[key] = f"{out[key]} {a}".strip()
    return out


# ---- session ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_login(state: AppState, args: list[str]) -> str:
    if not args:
        members = ", ".join(m.id for m in state.store.team())
        return f"Usage: /login <member id|guest>. Members: {members}."
    state.store.login(resolve_identity(state.store, args[0]))
    return f"Welcome, {state.store.identity.display_name}."


def cmd_logout(state: AppState, args: list[str]) -> str:
    state.store.logout()
    return "Signed out."


def cmd_whoami(state: AppState, args: list[str]) -> str:
    ident = state.store.identity
    return f"{ident.display_name or 'Nobody'} ({ident.kind.value})"


# ---- board ----


def cmd_board(state: AppState, args: list[str]) -> str:
    """
    /board                                  -> show with current filter
    /board assignee=ria status=done q=mock  -> set filter, then show
    /board clear                            -> reset filter
    """
    if args == ["clear"]:
        state.board_filter = BoardFilter()
    elif args:
        kv = _split_key_values(args)
        f = state.board_filter
        status = kv.get("status", f.status)
        if is_wildcard(status):
            status = ALL
        else:
            try:
                status = TaskStatus.parse(status)
            except ValueError as e:
                raise ValidationError(str(e)) from None
        assignee = kv.get("assignee", f.assignee_id)
        state.board_filter = BoardFilter(
            assignee_id=ALL if is_wildcard(assignee) else assignee,
            status=status,
            title_substring=kv.get("q", f.title_substring),
        )

    view = project_board(
        state.store.tasks(), state.board_filter, today=state.today(), member_of=state.store.member
    )
    lines: list[str] = []
    for status in COLUMNS:
        cards = view.columns[status]
        lines.append(f"{status.value.upper()} ({len(cards)})")
        lines.extend(_card_line(c) for c in cards)
        if not cards:
            lines.append("  (empty)")
    return "\n".join(lines)


def cmd_new(state: AppState, args: list[str]) -> str:
    """/new <title> | <assignee> | <YYYY-MM-DD> [| <priority> [| <status>]]"""
    fields = [p.strip() for p in " ".join(args).split("|")]
    if len(fields) < 3:
        return "Usage: /new <title> | <assignee> | <YYYY-MM-DD> [| <priority> [| <status>]]"
    draft = TaskDraft(
        title=fields[0],
        assignee_id=fields[1],
        due_date=fields[2],
        priority=fields[3] if len(fields) > 3 and fields[3] else "Medium",
        status=fields[4] if len(fields) > 4 and fields[4] else TaskStatus.TODO,
    )
    task, note = state.store.create_task(draft)
    reply = f"Created {task.id}: {task.title}."
    if note is not None:
        reply += f" Notified: {note.message}"
    return reply


def cmd_move(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /move <task id> <todo|in-progress|done>"
    task = state.store.set_task_status(args[0], " ".join(args[1:]))
    return f"{task.id} is now {task.status.value}."


def cmd_task(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /task <task id>"
    return _task_detail(state, state.store.get_task(args[0]))


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <task id> title=... assignee=... due=... priority=... status=..."""
    if len(args) < 2:
        return "Usage: /edit <task id> key=value ... (title, assignee, due, priority, status)"
    rename = {"title": "title", "assignee": "assignee_id", "due": "due_date", "priority": "priority", "status": "status"}
    changes: dict[str, str] = {}
    for k, v in _split_key_values(args[1:]).items():
        if k not in rename:
            raise ValidationError(f"Unknown task field {k!r}.")
        changes[rename[k]] = v
    task = task_api.edit_task(state.store, args[0], **changes)
    return _task_detail(state, task)


def cmd_check(state: AppState, args: list[str]) -> str:
    """/check add <task> <text> | /check toggle <task> <item> | /check rm <task> <item>"""
    if len(args) < 3:
        return "Usage: /check add <task> <text> | /check toggle <task> <item> | /check rm <task> <item>"
    sub, task_id, rest = args[0].lower(), args[1], args[2:]
    if sub == "add":
        task = task_api.add_checklist_item(state.store, task_id, " ".join(rest))
    elif sub == "toggle":
        task = task_api.toggle_checklist_item(state.store, task_id, rest[0])
    elif sub in ("rm", "remove"):
        task = task_api.remove_checklist_item(state.store, task_id, rest[0])
    else:
        return f"Unknown /check subcommand: {sub}."
    return _task_detail(state, task)


def cmd_attach(state: AppState, args: list[str]) -> str:
    """/attach <task> <name> <content ref> [mime type] | /attach rm <task> <attachment id>"""
    if len(args) >= 3 and args[0].lower() in ("rm", "remove"):
        return _task_detail(state, task_api.remove_attachment(state.store, args[1], args[2]))
    if len(args) < 3:
        return "Usage: /attach <task> <name> <content ref> [mime type] | /attach rm <task> <id>"
    mime = args[3] if len(args) > 3 else "application/octet-stream"
    task = task_api.add_attachment(state.store, args[0], name=args[1], content_ref=args[2], mime_type=mime)
    return _task_detail(state, task)


def cmd_voice(state: AppState, args: list[str]) -> str:
    """/voice <task> <content ref> | /voice <task> clear"""
    if len(args) < 2:
        return "Usage: /voice <task> <content ref> | /voice <task> clear"
    ref = None if args[1].lower() == "clear" else args[1]
    task = task_api.set_voice_note(state.store, args[0], ref)
    return f"{task.id} voice note {'set' if task.voice_note_ref else 'cleared'}."


# ---- calendar ----


_WEEKDAYS = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


def _month_grid(month: CalendarMonth, selected: date | None) -> list[str]:
    """Sunday-first grid; "*" marks days with tasks, "<" the selected day."""
    cells = ["   "] * month.leading_blanks
    for d in month.days:
        mark = "<" if d.day == selected else "*" if d.has_tasks else " "
        cells.append(f"{d.day.day:2d}{mark}")
    rows = [" ".join(_WEEKDAYS)]
    rows.extend("".join(cells[i : i + 7]).rstrip() for i in range(0, len(cells), 7))
    return rows


def cmd_calendar(state: AppState, args: list[str]) -> str:
    """/calendar [prev|next|YYYY-MM] [grid]"""
    grid = bool(args) and args[-1].lower() == "grid"
    if grid:
        args = args[:-1]
    if args:
        arg = args[0].lower()
        if arg in ("prev", "next"):
            state.calendar_year, state.calendar_month = shift_month(
                state.calendar_year, state.calendar_month, -1 if arg == "prev" else 1
            )
        else:
            first = parse_due_date(f"{arg}-01")
            state.calendar_year, state.calendar_month = first.year, first.month

    month = project_month(state.store.tasks(), state.calendar_year, state.calendar_month)
    if grid:
        return "\n".join([month.month_name] + _month_grid(month, state.selected_day))
    lines = [month.month_name]
    for day in month.days:
        if not day.has_tasks:
            continue
        titles = [state.store.get_task(tid).title for tid in day.preview_ids]
        more = f" (+{day.more_count} more)" if day.more_count else ""
        lines.append(f"  {day.day.day:2d}: {'; '.join(titles)}{more}")
    if len(lines) == 1:
        lines.append("  No tasks due this month.")
    return "\n".join(lines)


def cmd_day(state: AppState, args: list[str]) -> str:
    """/day <YYYY-MM-DD>, or /day alone to reopen the last selected day."""
    if args:
        day: date = parse_due_date(args[0])
    elif state.selected_day is not None:
        day = state.selected_day
    else:
        return "Usage: /day <YYYY-MM-DD>"
    tasks = tasks_due_on(state.store.tasks(), day)
    if not tasks:
        return f"No tasks due {day.isoformat()}."
    state.selected_day = day
    return "\n".join([f"Tasks for {day.isoformat()}:"] + [f"  {t.id}: {t.title}" for t in tasks])


# ---- feedback ----


def cmd_feedback(state: AppState, args: list[str]) -> str:
    """
    /feedback                      -> list (newest first)
    /feedback send <to> <text...>  -> submit as yourself
    /feedback edit <id> <text...>  -> edit your own feedback
    """
    store = state.store
    if not args:
        items = feedback_newest_first(store.feedback())
        if not items:
            return "No feedback yet."
        lines = []
        for fb in items:
            mark = " (editable)" if can_edit_feedback(fb, store.identity) else ""
            lines.append(
                f"  {fb.id} {fb.date.isoformat()} {_name(state, fb.from_id)} -> "
                f"{_name(state, fb.to_id)}: {fb.text}{mark}"
            )
        return "\n".join(["Feedback:"] + lines)

    sub = args[0].lower()
    if sub == "send":
        if len(args) < 3:
            return "Usage: /feedback send <to> <text...>"
        fb, note = store.submit_feedback(args[1], " ".join(args[2:]))
        reply = f"Feedback {fb.id} sent to {_name(state, fb.to_id)}."
        if note is not None:
            reply += f" Notified: {note.message}"
        return reply
    if sub == "edit":
        if len(args) < 3:
            return "Usage: /feedback edit <id> <text...>"
        fb = store.edit_feedback(args[1], " ".join(args[2:]))
        return f"Feedback {fb.id} updated."
    return f"Unknown /feedback subcommand: {sub}."


# ---- timesheet / notifications ----


def cmd_timesheet(state: AppState, args: list[str]) -> str:
    sheet = weekly_timesheet(
        state.store.tasks(), state.store.feedback(), state.store.identity.member_id, state.clock.now()
    )
    lines = ["Weekly Timesheet", "Tasks Completed (Last 7 Days):"]
    lines.extend(f"  {t.title}" for t in sheet.completed_tasks)
    if not sheet.completed_tasks:
        lines.append("  No tasks completed in the last week.")
    lines.append("Feedback Activity (Last 7 Days):")
    lines.extend(
        f'  From {_name(state, fb.from_id)} to {_name(state, fb.to_id)}: "{fb.text}"' for fb in sheet.feedback
    )
    if not sheet.feedback:
        lines.append("  No feedback activity in the last week.")
    return "\n".join(lines)


def cmd_notifications(state: AppState, args: list[str]) -> str:
    """Toggle the notification panel; opening it marks everything read."""
    if args and args[0].lower() == "count":
        return f"Unread: {unread_count(state.store.notifications())}"
    shown = state.panel.toggle()
    if not state.panel.is_open:
        return "Notifications closed."
    if not shown:
        return "No notifications yet."
    return "\n".join(["Notifications:"] + [f"  {n.message}" for n in shown])


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Sign in: /login <member id> | /login guest.")
registry.register("logout", cmd_logout, help_text="Sign out.")
registry.register("whoami", cmd_whoami, help_text="Show the current identity.")
registry.register("board", cmd_board, help_text="Board: /board [assignee=..] [status=..] [q=..] | /board clear.")
registry.register("new", cmd_new, help_text="Create a task: /new title | assignee | YYYY-MM-DD [| priority].")
registry.register("move", cmd_move, help_text="Change status: /move <task> <todo|in-progress|done>.")
registry.register("task", cmd_task, help_text="Show one task: /task <task id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <task> title=.. due=.. priority=.. ...")
registry.register("check", cmd_check, help_text="Checklist: /check add|toggle|rm <task> ...")
registry.register("attach", cmd_attach, help_text="Attachments: /attach <task> <name> <ref> [mime] | rm.")
registry.register("voice", cmd_voice, help_text="Voice note: /voice <task> <ref> | clear.")
registry.register("calendar", cmd_calendar, help_text="Month view: /calendar [prev|next|YYYY-MM] [grid].", aliases=["cal"])
registry.register("day", cmd_day, help_text="All tasks due on a day: /day YYYY-MM-DD (no date: last selected day).")
registry.register("feedback", cmd_feedback, help_text="Feedback: /feedback | send <to> <text> | edit <id> <text>.", aliases=["fb"])
registry.register("timesheet", cmd_timesheet, help_text="Your last 7 days.")
registry.register("notifications", cmd_notifications, help_text="Toggle notifications | /notifications count.", aliases=["bell"])
