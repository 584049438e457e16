# src/team_board/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "team_board.log"
_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
# Marks handlers installed here, so a second setup replaces them and nothing else.
_OWNED = "_team_board_handler"


class _ConsoleNoiseFilter(logging.Filter):
    """
    The REPL shares stderr with the log, so only our own records get through
    below ERROR. Captured warnings ('py.warnings') and third-party loggers
    have to reach ERROR to be shown.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "team_board" or record.name.startswith("team_board."):
            return True
        return record.levelno >= logging.ERROR


def level_from_name(name: str | int | None, default: int = logging.INFO) -> int:
    """"debug" / "INFO" / 30 -> logging level; unknown names give `default`."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    return handler


def _console_handler(level: int) -> logging.Handler:
    h = logging.StreamHandler(sys.stderr)
    h.setLevel(level)
    h.addFilter(_ConsoleNoiseFilter())
    return _owned(h)


def _file_handler(path: Path, level: int) -> logging.Handler:
    h = logging.FileHandler(str(path), encoding="utf-8")
    h.setLevel(level)
    return _owned(h)


def setup_logging(
    *,
    log_dir: str | Path = ".local/team_board",
    console_level: str | int = logging.WARNING,
    file_level: str | int = logging.DEBUG,
) -> Path:
    """
    Install the console handler (filtered) and the session log file.

    Call once at startup, before the first log record. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()

    root.addHandler(_console_handler(level_from_name(console_level, logging.WARNING)))
    root.addHandler(_file_handler(log_file, level_from_name(file_level, logging.DEBUG)))

    logging.captureWarnings(True)
    logging.getLogger(__name__).debug("Logging to %s", log_file)
    return log_file
