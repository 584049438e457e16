# src/team_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) log directory exists,
- builds the entity store (seeded or empty) and signs in the configured identity,
- wires everything into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import ValidationError
from ..core.ports import Clock
from ..core.state import AppState
from ..store.entity_store import EntityStore, SystemClock
from ..store.models import Identity
from ..store.seed import SEED_TEAM, build_seeded_store

logger = logging.getLogger(__name__)

GUEST_TOKEN = "guest"


def resolve_identity(store: EntityStore, token: str | None) -> Identity:
    """
    Map a login token to an Identity: member id, "guest", or empty for nobody.
    """
    token = (token or "").strip()
    if not token:
        return Identity.anonymous()
    if token.lower() == GUEST_TOKEN:
        return Identity.guest()
    member = store.member(token)
    if member is None:
        raise ValidationError(f"Unknown team member: {token!r}.")
    return Identity.of(member)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and clock injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if clock is None:
        clock = SystemClock()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    today = clock.now().date()
    if settings.seed_demo:
        store = build_seeded_store(today, clock=clock)
    else:
        store = EntityStore(SEED_TEAM, clock=clock)

    try:
        store.login(resolve_identity(store, settings.identity))
    except ValidationError:
        logger.warning("Configured identity %r is not a team member; starting signed out.", settings.identity)

    year, month = settings.calendar_month(today)
    return AppState(
        settings=settings,
        store=store,
        clock=clock,
        calendar_year=year,
        calendar_month=month,
    )
