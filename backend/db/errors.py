"""Database error helpers."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError indicates a unique-constraint conflict."""
    original = getattr(error, "orig", None)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == "23505":
        return True
    message = str(original or error).lower()
    return "duplicate key" in message or "unique constraint" in message


# Most specific first. PostgreSQL names the index and echoes the key
# (`"ix_users_email"`, `Key (email)=(...)`); SQLite reports `users.email`.
_VIOLATION_MARKERS: tuple[Callable[[str, str], str], ...] = (
    lambda table, column: f'"ix_{table}_{column}"',
    lambda table, column: f"key ({column})=",
    lambda table, column: f"failed: {table}.{column}",
)


def violated_column(
    error: IntegrityError,
    table: str,
    candidates: tuple[str, ...],
) -> str | None:
    """Return which of ``candidates`` on ``table`` a unique violation refers to.

    Matches on the index name or the reported key, never on bare column
    names, so a duplicate value such as ``username@example.com`` cannot be
    mistaken for the ``username`` column.
    """
    message = str(getattr(error, "orig", None) or error).lower()
    for marker in _VIOLATION_MARKERS:
        for column in candidates:
            if marker(table.lower(), column.lower()) in message:
                return column
    return None


__all__ = ["is_unique_violation", "violated_column"]
