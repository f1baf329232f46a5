"""
Sessions component - New reading session and book edits.

Shell Layer - handles gateway I/O and error conversion.

Moving the previous active session to past_sessions is left to the
session endpoint; nothing here archives sessions.
"""

from __future__ import annotations

import logging
from typing import Any

from src.core.ports.gateways import GatewayError
from src.domain.entities import Club

from ._impl import validate_book, validate_due_date
from .models import CreateSessionInput, SessionError, SessionOperationOutput, UpdateBookInput
from .ports import ClockPort, SessionGatewayPort

logger = logging.getLogger(__name__)


def _failed(session_id: str | None, *errors: SessionError) -> SessionOperationOutput:
    return SessionOperationOutput(session_id=session_id, errors=errors, success=False)


def run_create_session(
    inp: CreateSessionInput,
    snapshot: Club,
    *,
    sessions: SessionGatewayPort,
    clock: ClockPort,
) -> SessionOperationOutput:
    """Start a new session for the club (POST {club_id, book, due_date})."""
    book, errors = validate_book(inp.title, inp.author, inp.year)
    errors += validate_due_date(inp.due_date, clock.today())
    if book is None or errors:
        return _failed(None, *errors)

    try:
        created = sessions.create(
            {"club_id": snapshot.id, "book": book, "due_date": inp.due_date}
        )
    except GatewayError as e:
        logger.warning("Error creating session for club %s: %s", snapshot.id, e)
        return _failed(
            None, SessionError(code="gateway_error", message=e.message or "Failed to create session")
        )

    session_id = created.get("id") if isinstance(created, dict) else None
    logger.info("Session created for club %s: %s", snapshot.id, session_id)
    return SessionOperationOutput(session_id=session_id, errors=(), success=True)


def run_update_book(
    inp: UpdateBookInput,
    snapshot: Club,
    *,
    sessions: SessionGatewayPort,
) -> SessionOperationOutput:
    """Replace the active session's book (and due date when given)."""
    session = snapshot.active_session
    if session is None:
        return _failed(
            None, SessionError(code="no_active_session", message="No active session to update")
        )

    book, errors = validate_book(inp.title, inp.author, inp.year)
    if book is None:
        return _failed(session.id, *errors)
    edition = (inp.edition or "").strip()
    if edition:
        book["edition"] = edition
    if session.book.isbn:
        book["isbn"] = session.book.isbn

    payload: dict[str, Any] = {"id": session.id, "book": book}
    if inp.due_date:
        payload["due_date"] = inp.due_date

    try:
        sessions.update(payload)
    except GatewayError as e:
        logger.warning("Error updating book of session %s: %s", session.id, e)
        return _failed(
            session.id, SessionError(code="gateway_error", message=e.message or "Failed to update book")
        )

    return SessionOperationOutput(session_id=session.id, errors=(), success=True)
