# src/team_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on a Protocol for "now" instead of the wall clock, so tests
can pin time.
"""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of "now". The store asks it for feedback dates; views take "now" explicitly."""

    def now(self) -> datetime: ...
