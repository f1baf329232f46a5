"""
Sessions component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

# --- Errors ---


@dataclass(frozen=True)
class SessionError:
    """Session validation or write error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateSessionInput:
    """Start a new reading session for a club."""

    title: str
    author: str
    due_date: str
    year: str | int | None = None


@dataclass(frozen=True)
class UpdateBookInput:
    """Edit the active session's book and due date."""

    title: str
    author: str
    edition: str | None = None
    year: str | int | None = None
    due_date: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class SessionOperationOutput:
    """Output from a session operation."""

    session_id: str | None
    errors: tuple[SessionError, ...]
    success: bool
