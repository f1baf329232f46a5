"""
Clubs component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

# --- Errors ---


@dataclass(frozen=True)
class ClubError:
    """Club validation or write error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateClubInput:
    """Input for creating a club on the active server."""

    name: str
    discord_channel: str | None = None


@dataclass(frozen=True)
class DeleteClubInput:
    """Input for deleting a club of the active server."""

    club_id: str


# --- Output Models ---


@dataclass(frozen=True)
class ClubOperationOutput:
    """Output from a club operation."""

    club_id: str | None
    errors: tuple[ClubError, ...]
    success: bool
    selection_cleared: bool = False
