"""
Selection transitions.

Functional Core - no I/O. Each transition mutates the owned SelectionState
handed in by the caller and nothing else.
"""

from __future__ import annotations

from src.domain.entities import Server

from .models import SelectionState


def resolve_server_selection(
    servers: list[Server],
    previous: str | None,
    preserve: bool,
) -> str | None:
    """
    Pick the server to show after a list refresh.

    Keeps `previous` when asked to and it is still listed; otherwise falls
    back to the first server, or None for an empty list.
    """
    if preserve and previous is not None and any(s.id == previous for s in servers):
        return previous
    if servers:
        return servers[0].id
    return None


def select_server(state: SelectionState, server_id: str) -> None:
    """No club is valid across servers, so the club is always cleared."""
    state.server_id = server_id
    state.club = None


def apply_server_list(
    state: SelectionState,
    servers: list[Server],
    preserve: bool,
) -> None:
    new_id = resolve_server_selection(servers, state.server_id, preserve)
    if new_id != state.server_id:
        state.club = None
    state.servers = list(servers)
    state.server_id = new_id


def clear_club_if(state: SelectionState, club_id: str) -> bool:
    """Clear the club pane if it shows `club_id`. Returns True if cleared."""
    if state.club is not None and state.club.id == club_id:
        state.club = None
        return True
    return False
