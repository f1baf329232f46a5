"""
Discussions component - Whole-array rewrite of a session's discussions.
"""

from ._impl import (
    apply_discussion_edit,
    build_session_payload,
    is_past,
    new_discussion_id,
    sort_for_display,
    validate_discussion,
)
from .component import run_add_discussion, run_delete_discussion, run_edit_discussion
from .models import (
    AddDiscussion,
    DeleteDiscussion,
    DiscussionEdit,
    DiscussionError,
    DiscussionNotFound,
    DiscussionOp,
    DiscussionOutput,
    EditDiscussion,
)
from .ports import ClockPort, SessionGatewayPort

__all__ = [
    # Entry points
    "run_add_discussion",
    "run_edit_discussion",
    "run_delete_discussion",
    # Functional core
    "apply_discussion_edit",
    "build_session_payload",
    "validate_discussion",
    "sort_for_display",
    "is_past",
    "new_discussion_id",
    # Models
    "AddDiscussion",
    "EditDiscussion",
    "DeleteDiscussion",
    "DiscussionOp",
    "DiscussionEdit",
    "DiscussionOutput",
    "DiscussionError",
    "DiscussionNotFound",
    # Ports
    "ClockPort",
    "SessionGatewayPort",
]
