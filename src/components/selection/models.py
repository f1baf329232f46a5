"""
Selection component - Data models.

Tracks which server and club the dashboard is showing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import Club, Server

# --- Errors ---


@dataclass(frozen=True)
class SelectionError:
    """Selection or refresh error."""

    code: str
    message: str
    field: str | None = None


# --- State ---


@dataclass
class SelectionState:
    """
    Owned dashboard state, passed by reference to every operation.

    `club` is the last successfully fetched nested club record; it is only
    replaced by a successful fetch and only cleared by explicit transitions.
    """

    servers: list[Server] = field(default_factory=list)
    server_id: str | None = None
    club: Club | None = None
    error: str | None = None

    def selected_server(self) -> Server | None:
        return next((s for s in self.servers if s.id == self.server_id), None)

    @property
    def club_id(self) -> str | None:
        return self.club.id if self.club else None


# --- Input Models ---


@dataclass(frozen=True)
class SelectServerInput:
    """Input for choosing a server."""

    server_id: str


@dataclass(frozen=True)
class RefreshServersInput:
    """Input for re-fetching the server list."""

    preserve_selection: bool = True


@dataclass(frozen=True)
class SelectClubInput:
    """Input for choosing (and fetching) a club."""

    club_id: str


# --- Output Models ---


@dataclass(frozen=True)
class SelectionOutput:
    """Output from a selection operation."""

    server_id: str | None
    club: Club | None
    errors: tuple[SelectionError, ...]
    success: bool
