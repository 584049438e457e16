# src/team_board/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..store.entity_store import EntityStore
from ..store.notifications import NotificationPanel
from ..views.board import BoardFilter
from .ports import Clock


@dataclass
class AppState:
    """One browser-tab session: the store plus the UI-side cursor state."""

    settings: object
    store: EntityStore
    clock: Clock

    board_filter: BoardFilter = field(default_factory=BoardFilter)
    calendar_year: int = 2024
    calendar_month: int = 7
    selected_day: date | None = None
    panel: NotificationPanel = field(init=False)

    def __post_init__(self) -> None:
        self.panel = NotificationPanel(self.store.notifications, self.store.clear_notifications)

    def today(self) -> date:
        return self.clock.now().date()
