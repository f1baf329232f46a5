"""
Clubs component - Club creation and cascade-aware delete.

Shell Layer - handles gateway I/O and error conversion.

Delete invariants:
- On success the club pane is cleared if it showed the deleted club,
  before the caller refreshes the server list
- On failure nothing local changes (fail closed)
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.components.selection import SelectionState, clear_club_if
from src.core.ports.gateways import GatewayError

from ._impl import create_club_payload, new_club_id, validate_club_name
from .models import ClubError, ClubOperationOutput, CreateClubInput, DeleteClubInput
from .ports import ClubGatewayPort

logger = logging.getLogger(__name__)


def _no_server() -> ClubOperationOutput:
    return ClubOperationOutput(
        club_id=None,
        errors=(
            ClubError(
                code="no_server_selected",
                message="Select a server first",
                field="server_id",
            ),
        ),
        success=False,
    )


def run_create_club(
    inp: CreateClubInput,
    server_id: str | None,
    *,
    clubs: ClubGatewayPort,
    id_factory: Callable[[], str] = new_club_id,
) -> ClubOperationOutput:
    """
    Create a club on the given server.

    The id is generated here so the caller can select the new club without
    reading it back from the response.
    """
    errors = validate_club_name(inp.name)
    if errors:
        return ClubOperationOutput(club_id=None, errors=tuple(errors), success=False)
    if server_id is None:
        return _no_server()

    club_id = id_factory()
    payload = create_club_payload(club_id, inp.name, server_id, inp.discord_channel)
    try:
        clubs.create(payload)
    except GatewayError as e:
        logger.warning("Error creating club: %s", e)
        return ClubOperationOutput(
            club_id=None,
            errors=(ClubError(code="gateway_error", message=e.message or "Failed to create club"),),
            success=False,
        )

    logger.info("Club created: %s (%s)", payload["name"], club_id)
    return ClubOperationOutput(club_id=club_id, errors=(), success=True)


def run_delete_club(
    inp: DeleteClubInput,
    state: SelectionState,
    *,
    clubs: ClubGatewayPort,
) -> ClubOperationOutput:
    """Delete a club of the active server and drop it from the selection."""
    if state.server_id is None:
        return _no_server()

    try:
        clubs.delete(inp.club_id, state.server_id)
    except GatewayError as e:
        logger.warning("Error deleting club %s: %s", inp.club_id, e)
        return ClubOperationOutput(
            club_id=inp.club_id,
            errors=(ClubError(code="gateway_error", message=e.message or "Failed to delete club"),),
            success=False,
        )

    cleared = clear_club_if(state, inp.club_id)
    logger.info("Club deleted: %s (selection cleared: %s)", inp.club_id, cleared)
    return ClubOperationOutput(
        club_id=inp.club_id,
        errors=(),
        success=True,
        selection_cleared=cleared,
    )
