"""
Session and book validation.

Functional Core - pure business logic.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from src.domain.dates import parse_date

from .models import SessionError


def _parse_year(year: str | int | None) -> tuple[int | None, SessionError | None]:
    if year is None:
        return None, None
    if isinstance(year, int) and not isinstance(year, bool):
        return year, None
    text = str(year).strip()
    if not text:
        return None, None
    try:
        return int(text), None
    except ValueError:
        return None, SessionError(code="year_invalid", message="Year must be a number", field="year")


def validate_book(
    title: str,
    author: str,
    year: str | int | None,
) -> tuple[dict[str, Any] | None, list[SessionError]]:
    """
    Validate book fields.

    Returns:
        Tuple of (book payload, errors). Payload is None if validation fails.
    """
    errors: list[SessionError] = []
    if not (title or "").strip() or not (author or "").strip():
        errors.append(
            SessionError(code="title_author_required", message="Title and Author are required")
        )
    parsed_year, year_error = _parse_year(year)
    if year_error:
        errors.append(year_error)
    if errors:
        return None, errors

    book: dict[str, Any] = {"title": title.strip(), "author": author.strip()}
    if parsed_year is not None:
        book["year"] = parsed_year
    return book, []


def validate_due_date(due_date: str | None, today: date) -> list[SessionError]:
    """New sessions need a due date strictly after today."""
    if not due_date:
        return [SessionError(code="due_date_required", message="Due date is required", field="due_date")]
    parsed = parse_date(due_date)
    if parsed is None:
        return [
            SessionError(code="due_date_invalid", message="Due date is not a valid date", field="due_date")
        ]
    if parsed <= today:
        return [
            SessionError(code="due_date_in_past", message="Due date must be in the future", field="due_date")
        ]
    return []
