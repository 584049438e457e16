# src/team_board/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; bad values fall back to defaults.
- The urgency threshold and the timesheet window are not settings (see views/).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEAMBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_month(name: str, default: tuple[int, int] | None) -> tuple[int, int] | None:
    """Parse "YYYY-MM"; empty means "current month" (None)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    try:
        year_s, month_s = raw.split("-", 1)
        year, month = int(year_s), int(month_s)
    except ValueError:
        logger.warning("Ignoring %s=%r (expected YYYY-MM).", name, raw)
        return default
    if not 1 <= month <= 12:
        logger.warning("Ignoring %s=%r (month out of range).", name, raw)
        return default
    return year, month


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Session ----
    seed_demo: bool
    # member id, "guest", or "" (nobody signed in)
    identity: str
    # None -> month of "today"
    calendar_start: tuple[int, int] | None

    # ---- Connectors ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "team-board") or "team-board",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/team_board")),
            seed_demo=_env_bool(_k("SEED_DEMO"), True),
            identity=_env(_k("IDENTITY"), "").strip(),
            calendar_start=_env_month(_k("CALENDAR_START"), (2024, 7)),
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
        )

    def calendar_month(self, today: date) -> tuple[int, int]:
        return self.calendar_start or (today.year, today.month)


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
