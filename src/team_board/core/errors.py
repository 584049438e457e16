# src/team_board/core/errors.py

"""
Error taxonomy for board mutations.

Every check runs before the store is touched, so a raised error always means
"nothing changed". Callers (the command layer) render `str(err)` inline.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base class for caller-input-shaped failures."""

    kind = "error"


class ValidationError(BoardError, ValueError):
    """Empty required field, missing/malformed date, unknown enum value or assignee."""

    kind = "validation"


class NotFoundError(BoardError, LookupError):
    """Mutation targeted an id that is not in the store."""

    kind = "not_found"


class ForbiddenError(BoardError, PermissionError):
    """Current identity is not allowed to perform the mutation."""

    kind = "forbidden"
