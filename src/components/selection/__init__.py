"""
Selection component - Active server/club tracking across refreshes.
"""

from ._impl import apply_server_list, clear_club_if, resolve_server_selection, select_server
from .component import run_refresh_servers, run_select_club, run_select_server
from .models import (
    RefreshServersInput,
    SelectClubInput,
    SelectionError,
    SelectionOutput,
    SelectionState,
    SelectServerInput,
)
from .ports import ClubGatewayPort, ServerGatewayPort

__all__ = [
    # Entry points
    "run_select_server",
    "run_refresh_servers",
    "run_select_club",
    # Transitions
    "apply_server_list",
    "clear_club_if",
    "resolve_server_selection",
    "select_server",
    # Models
    "SelectionState",
    "SelectServerInput",
    "RefreshServersInput",
    "SelectClubInput",
    "SelectionOutput",
    "SelectionError",
    # Ports
    "ClubGatewayPort",
    "ServerGatewayPort",
]
