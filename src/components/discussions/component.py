"""
Discussions component - Add, edit and delete discussions of the active session.

Shell Layer - validates, rewrites the array, issues one Session PUT.

The caller re-fetches the club afterwards: the displayed discussions come
from club.active_session, not from the Session write response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.core.ports.gateways import GatewayError
from src.domain.entities import Club

from ._impl import (
    apply_discussion_edit,
    build_session_payload,
    new_discussion_id,
    validate_discussion,
)
from .models import (
    AddDiscussion,
    DeleteDiscussion,
    DiscussionError,
    DiscussionNotFound,
    DiscussionOp,
    DiscussionOutput,
    EditDiscussion,
)
from .ports import ClockPort, SessionGatewayPort

logger = logging.getLogger(__name__)

_VERBS = {AddDiscussion: "add", EditDiscussion: "update", DeleteDiscussion: "delete"}


def _failure(snapshot: Club, *errors: DiscussionError) -> DiscussionOutput:
    session = snapshot.active_session
    return DiscussionOutput(
        discussions=tuple(session.discussions) if session else (),
        discussion_id=None,
        errors=errors,
        success=False,
    )


def _write(
    op: DiscussionOp,
    snapshot: Club,
    sessions: SessionGatewayPort,
    id_factory: Callable[[], str],
) -> DiscussionOutput:
    session = snapshot.active_session
    if session is None:
        return _failure(
            snapshot,
            DiscussionError(code="no_active_session", message="No active session found"),
        )

    try:
        edit = apply_discussion_edit(session.discussions, op, id_factory)
    except DiscussionNotFound as e:
        return _failure(
            snapshot,
            DiscussionError(
                code="discussion_not_found",
                message=str(e),
                field="discussion_id",
            ),
        )

    payload = build_session_payload(session.id, edit)
    verb = _VERBS[type(op)]
    try:
        sessions.update(payload)
    except GatewayError as e:
        logger.warning("Error trying to %s discussion: %s", verb, e)
        return _failure(
            snapshot,
            DiscussionError(
                code="gateway_error",
                message=e.message or f"Failed to {verb} discussion",
            ),
        )

    logger.info("Discussion %s: %s (session %s)", verb, edit.discussion_id, session.id)
    return DiscussionOutput(
        discussions=edit.discussions,
        discussion_id=edit.discussion_id,
        errors=(),
        success=True,
    )


def run_add_discussion(
    inp: AddDiscussion,
    snapshot: Club,
    *,
    sessions: SessionGatewayPort,
    clock: ClockPort,
    id_factory: Callable[[], str] = new_discussion_id,
) -> DiscussionOutput:
    """Append a discussion to the club's active session."""
    errors = validate_discussion(inp.title, inp.date, clock.today())
    if errors:
        return _failure(snapshot, *errors)
    return _write(inp, snapshot, sessions, id_factory)


def run_edit_discussion(
    inp: EditDiscussion,
    snapshot: Club,
    *,
    sessions: SessionGatewayPort,
    clock: ClockPort,
) -> DiscussionOutput:
    """
    Replace a discussion in place.

    The not-in-the-past rule only applies when the date is being changed,
    so an already held discussion can still be corrected.
    """
    existing = None
    if snapshot.active_session is not None:
        existing = next(
            (d for d in snapshot.active_session.discussions if d.id == inp.discussion_id),
            None,
        )
    date_changed = existing is None or existing.date != inp.date
    errors = validate_discussion(
        inp.title, inp.date, clock.today(), check_not_past=date_changed
    )
    if errors:
        return _failure(snapshot, *errors)
    return _write(inp, snapshot, sessions, new_discussion_id)


def run_delete_discussion(
    inp: DeleteDiscussion,
    snapshot: Club,
    *,
    sessions: SessionGatewayPort,
) -> DiscussionOutput:
    """Remove one discussion from the active session."""
    return _write(inp, snapshot, sessions, new_discussion_id)
