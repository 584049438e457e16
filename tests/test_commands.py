# tests/test_commands.py

from __future__ import annotations

import builtins

import pytest

from team_board.cli.commands import registry
from team_board.connectors.console_connector import run_console_loop
from team_board.core.state import AppState
from team_board.store.models import IdentityKind, TaskStatus


def run(state: AppState, line: str) -> str:
    reply = registry.handle(state, line)
    assert reply is not None
    return reply


def test_non_command_returns_none(state: AppState) -> None:
    assert registry.handle(state, "hello there") is None


def test_unknown_and_empty_commands(state: AppState) -> None:
    assert run(state, "/nope").startswith("Unknown command: /nope")
    assert run(state, "/").startswith("Empty command")


def test_help_lists_registered_commands(state: AppState) -> None:
    reply = run(state, "/?")
    assert reply.startswith("Available commands:")
    for name in ("/board", "/new", "/calendar", "/feedback", "/timesheet", "/notifications"):
        assert name in reply


def test_initial_state_signed_in_from_settings(state: AppState) -> None:
    assert state.store.identity.member_id == "ria"
    assert (state.calendar_year, state.calendar_month) == (2024, 7)
    assert state.settings.data_dir.is_dir()
    assert run(state, "/whoami") == "Ria (member)"


def test_board_shows_columns_with_counts(state: AppState) -> None:
    reply = run(state, "/board")
    assert "TO DO (2)" in reply
    assert "IN PROGRESS (2)" in reply
    assert "DONE (2)" in reply
    assert "task-2: Design initial UI mockups" in reply
    assert "checklist 1/2" in reply
    assert "overdue" in reply


def test_board_filter_persists_until_cleared(state: AppState) -> None:
    reply = run(state, "/board assignee=ria q=ui mock")
    assert "IN PROGRESS (1)" in reply
    assert "TO DO (0)" in reply
    assert state.board_filter.title_substring == "ui mock"

    assert "IN PROGRESS (1)" in run(state, "/board")
    assert "TO DO (2)" in run(state, "/board clear")


def test_board_rejects_unknown_status(state: AppState) -> None:
    assert run(state, "/board status=blocked").startswith("Not done:")


def test_board_wildcard_any_case(state: AppState) -> None:
    run(state, "/board assignee=ria status=done")
    reply = run(state, "/board assignee=ALL status=All")
    assert "TO DO (2)" in reply
    assert state.board_filter.assignee_id == "all"
    assert state.board_filter.status == "all"


def test_new_task_reports_notification(state: AppState) -> None:
    reply = run(state, "/new Write docs | karan | 2024-07-30 | High")

    assert reply.startswith("Created task-7: Write docs.")
    assert 'Notified: New task "Write docs" assigned to you.' in reply
    assert state.store.get_task("task-7").status == TaskStatus.TODO


def test_new_task_validation_is_reported(state: AppState) -> None:
    before = state.store.tasks()
    assert run(state, "/new Write docs | nobody | 2024-07-30").startswith("Not done:")
    assert run(state, "/new  | karan | 2024-07-30").startswith("Not done:")
    assert run(state, "/new only title").startswith("Usage:")
    assert state.store.tasks() == before


def test_guest_cannot_move_tasks(state: AppState) -> None:
    run(state, "/login guest")
    assert state.store.identity.kind is IdentityKind.GUEST
    before = state.store.tasks()

    reply = run(state, "/move task-3 done")

    assert reply.startswith("Not done:")
    assert state.store.tasks() == before


def test_move_changes_status(state: AppState) -> None:
    assert run(state, "/move task-3 in progress") == "task-3 is now In Progress."


def test_login_unknown_member(state: AppState) -> None:
    assert run(state, "/login zed").startswith("Not done:")
    assert state.store.identity.member_id == "ria"
    assert run(state, "/login karan") == "Welcome, Karan."
    assert run(state, "/logout") == "Signed out."
    assert run(state, "/whoami") == "Nobody (anonymous)"


def test_edit_and_checklist_commands(state: AppState) -> None:
    reply = run(state, "/edit task-4 title=Integrate Docs API priority=High")
    assert "task-4: Integrate Docs API" in reply
    assert "priority: High" in reply

    reply = run(state, "/check add task-4 Read the API guide")
    assert "[ ] cl-3 Read the API guide" in reply
    assert "[x] cl-3" in run(state, "/check toggle task-4 cl-3")
    assert run(state, "/edit task-4 colour=red").startswith("Not done:")


def test_attach_and_voice_commands(state: AppState) -> None:
    reply = run(state, "/attach task-3 brief.txt data:text/plain;base64,eA== text/plain")
    assert "brief.txt (text/plain)" in reply
    assert run(state, "/voice task-3 data:audio/webm;base64,AA==") == "task-3 voice note set."
    assert run(state, "/voice task-3 clear") == "task-3 voice note cleared."


def test_feedback_send_list_and_edit(state: AppState) -> None:
    reply = run(state, "/feedback send karan Solid work on the components")
    assert reply == "Feedback fb-4 sent to Karan."

    listing = run(state, "/fb")
    lines = listing.splitlines()
    assert lines[0] == "Feedback:"
    assert lines[1].startswith("  fb-4 2024-07-24 Ria -> Karan: Solid work on the components (editable)")
    assert "Mentor -> Aarav" in listing

    assert run(state, "/feedback edit fb-4 Solid work") == "Feedback fb-4 updated."
    assert run(state, "/feedback edit fb-3 hijack").startswith("Not done:")


def test_feedback_to_self_notifies(state: AppState) -> None:
    reply = run(state, "/feedback send ria remember the retro")
    assert reply.endswith("Notified: Ria left feedback for you.")


def test_notifications_toggle_clears(state: AppState) -> None:
    run(state, "/new Write docs | karan | 2024-07-30")
    assert run(state, "/notifications count") == "Unread: 1"

    reply = run(state, "/bell")
    assert reply.splitlines() == ["Notifications:", '  New task "Write docs" assigned to you.']
    assert run(state, "/notifications count") == "Unread: 0"
    assert run(state, "/bell") == "Notifications closed."


def test_notifications_empty(state: AppState) -> None:
    assert run(state, "/notifications") == "No notifications yet."


def test_calendar_navigation(state: AppState) -> None:
    reply = run(state, "/calendar 2024-07")
    assert reply.splitlines()[0] == "July 2024"
    assert "  25: Develop frontend components" in reply

    assert run(state, "/cal next").splitlines() == ["August 2024", "  No tasks due this month."]
    assert run(state, "/cal prev").startswith("July 2024")
    assert run(state, "/calendar 2024-13").startswith("Not done:")


def test_day_lists_every_task(state: AppState) -> None:
    for title in ("A", "B", "C"):
        run(state, f"/new {title} | ria | 2024-07-30")

    assert "+1 more" in run(state, "/calendar")
    reply = run(state, "/day 2024-07-30")
    assert reply.splitlines() == ["Tasks for 2024-07-30:", "  task-7: A", "  task-8: B", "  task-9: C"]
    assert run(state, "/day 2024-07-01") == "No tasks due 2024-07-01."


def test_timesheet_for_identity(state: AppState) -> None:
    run(state, "/login karan")
    reply = run(state, "/timesheet")
    assert "  Schedule standup meetings" in reply
    assert 'From Ria to Karan: "Peer Review' in reply

    run(state, "/logout")
    reply = run(state, "/timesheet")
    assert "No tasks completed in the last week." in reply
    assert "No feedback activity in the last week." in reply


def test_console_loop_runs_commands(state: AppState, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    lines = iter(["", "hello", "/whoami", "/exit", "/whoami"])
    monkeypatch.setattr(builtins, "input", lambda _prompt="": next(lines))

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Commands start with '/'. Try /help." in out
    assert out.count("Ria (member)") == 1


def test_console_loop_stops_on_eof(state: AppState, monkeypatch: pytest.MonkeyPatch) -> None:
    def _eof(_prompt: str = "") -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", _eof)
    run_console_loop(state)


def test_calendar_grid_and_selected_day(state: AppState) -> None:
    lines = run(state, "/calendar 2024-07 grid").splitlines()
    assert lines[0] == "July 2024"
    assert lines[1] == "Su Mo Tu We Th Fr Sa"
    # 2024-07-01 is a Monday: one blank cell first
    assert lines[2] == "    1  2  3  4  5  6"
    assert "25*" in lines[5]

    assert run(state, "/day").startswith("Usage:")
    run(state, "/day 2024-07-25")
    assert "25<" in run(state, "/cal grid")
    assert run(state, "/day") == "Tasks for 2024-07-25:\n  task-3: Develop frontend components"


def test_panel_is_built_with_state(state: AppState) -> None:
    assert state.panel.is_open is False
    with pytest.raises(TypeError):
        AppState(settings=state.settings, store=state.store, clock=state.clock, panel=state.panel)
