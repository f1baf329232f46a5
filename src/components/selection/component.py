"""
Selection component - Server/club selection and refresh.

Shell Layer - handles gateway I/O and error conversion.

Invariants:
- Selecting a server clears the club
- A failed refresh or club fetch leaves the previous state intact
- The server list is always re-fetched, never patched locally
"""

from __future__ import annotations

import logging

from src.core.ports.gateways import GatewayError

from ._impl import apply_server_list, select_server
from .models import (
    RefreshServersInput,
    SelectClubInput,
    SelectionError,
    SelectionOutput,
    SelectionState,
    SelectServerInput,
)
from .ports import ClubGatewayPort, ServerGatewayPort

logger = logging.getLogger(__name__)


def _ok(state: SelectionState) -> SelectionOutput:
    return SelectionOutput(
        server_id=state.server_id,
        club=state.club,
        errors=(),
        success=True,
    )


def _fail(state: SelectionState, error: SelectionError) -> SelectionOutput:
    return SelectionOutput(
        server_id=state.server_id,
        club=state.club,
        errors=(error,),
        success=False,
    )


def run_select_server(
    inp: SelectServerInput,
    state: SelectionState,
) -> SelectionOutput:
    """Make a server active; the club pane is emptied."""
    if state.servers and not any(s.id == inp.server_id for s in state.servers):
        return _fail(
            state,
            SelectionError(
                code="server_not_found",
                message=f"Server {inp.server_id} not found",
                field="server_id",
            ),
        )

    select_server(state, inp.server_id)
    return _ok(state)


def run_refresh_servers(
    inp: RefreshServersInput,
    state: SelectionState,
    servers: ServerGatewayPort,
) -> SelectionOutput:
    """
    Re-fetch the server list.

    With preserve_selection the active server survives if it is still
    listed; otherwise the first server becomes active.
    """
    try:
        fetched = servers.list_servers()
    except GatewayError as e:
        logger.warning("Error fetching servers: %s", e)
        return _fail(
            state,
            SelectionError(code="gateway_error", message=e.message or "Failed to fetch servers"),
        )

    apply_server_list(state, fetched, inp.preserve_selection)
    logger.debug("Fetched %d servers, active=%s", len(fetched), state.server_id)
    return _ok(state)


def run_select_club(
    inp: SelectClubInput,
    state: SelectionState,
    clubs: ClubGatewayPort,
) -> SelectionOutput:
    """
    Fetch the fully nested club and make it active.

    On failure the previously shown club stays as it was.
    """
    if state.server_id is None:
        return _fail(
            state,
            SelectionError(
                code="no_server_selected",
                message="Select a server first",
                field="server_id",
            ),
        )

    try:
        club = clubs.get(inp.club_id, state.server_id)
    except GatewayError as e:
        logger.warning("Error fetching club details for %s: %s", inp.club_id, e)
        return _fail(
            state,
            SelectionError(
                code="gateway_error",
                message=e.message or "Failed to fetch club details",
            ),
        )

    state.club = club
    return _ok(state)
