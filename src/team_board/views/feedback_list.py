# src/team_board/views/feedback_list.py

from __future__ import annotations

from collections.abc import Iterable

from ..store.models import Feedback, Identity


def feedback_newest_first(feedback: Iterable[Feedback]) -> list[Feedback]:
    # Stable: same-day entries keep insertion order.
    return sorted(feedback, key=lambda f: f.date, reverse=True)


def can_edit_feedback(feedback: Feedback, identity: Identity) -> bool:
    return identity.member_id is not None and identity.member_id == feedback.from_id
