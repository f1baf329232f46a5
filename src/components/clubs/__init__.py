"""
Clubs component - Club creation and deletion.
"""

from ._impl import create_club_payload, new_club_id, validate_club_name
from .component import run_create_club, run_delete_club
from .models import ClubError, ClubOperationOutput, CreateClubInput, DeleteClubInput
from .ports import ClubGatewayPort

__all__ = [
    # Entry points
    "run_create_club",
    "run_delete_club",
    # Functional core
    "create_club_payload",
    "new_club_id",
    "validate_club_name",
    # Models
    "CreateClubInput",
    "DeleteClubInput",
    "ClubOperationOutput",
    "ClubError",
    # Ports
    "ClubGatewayPort",
]
