# tests/conftest.py

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from team_board.cli.bootstrap import create_initial_state
from team_board.core.state import AppState
from team_board.store.entity_store import EntityStore
from team_board.store.models import Identity
from team_board.store.seed import build_seeded_store

from .fakes import FixedClock

NOW = datetime(2024, 7, 24, 10, 30)
TODAY = NOW.date()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def store(clock: FixedClock) -> EntityStore:
    """Seeded store with Ria signed in."""
    s = build_seeded_store(TODAY, clock=clock)
    ria = s.member("ria")
    assert ria is not None
    s.login(Identity.of(ria))
    return s


@pytest.fixture()
def guest_store(clock: FixedClock) -> EntityStore:
    s = build_seeded_store(TODAY, clock=clock)
    s.login(Identity.guest())
    return s


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with create_initial_state.

    We use a SimpleNamespace rather than the real config so tests do not
    depend on the environment or a local .env.
    """
    return SimpleNamespace(
        app_name="team-board-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        seed_demo=True,
        identity="ria",
        calendar_start=(2024, 7),
        console_enabled=False,
        calendar_month=lambda today: (2024, 7),
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FixedClock) -> AppState:
    return create_initial_state(settings=settings, clock=clock)
