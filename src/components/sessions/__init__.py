"""
Sessions component - Reading sessions and their book.
"""

from ._impl import validate_book, validate_due_date
from .component import run_create_session, run_update_book
from .models import CreateSessionInput, SessionError, SessionOperationOutput, UpdateBookInput
from .ports import ClockPort, SessionGatewayPort

__all__ = [
    # Entry points
    "run_create_session",
    "run_update_book",
    # Functional core
    "validate_book",
    "validate_due_date",
    # Models
    "CreateSessionInput",
    "UpdateBookInput",
    "SessionOperationOutput",
    "SessionError",
    # Ports
    "ClockPort",
    "SessionGatewayPort",
]
