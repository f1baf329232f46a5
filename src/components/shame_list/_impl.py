"""
Shame list rules.

Functional Core - validation and write planning, no I/O.
"""

from __future__ import annotations

from typing import Any

from src.domain.entities import Club

from .models import MemberForm, ShameListError

MAX_NAME_LENGTH = 100


def is_on_shame_list(club: Club, member_id: int) -> bool:
    return member_id in club.shame_list


def _parse_count(
    value: Any,
    field: str,
    label: str,
) -> tuple[int | None, ShameListError | None]:
    error = ShameListError(
        code=f"{field}_invalid",
        message=f"{label} must be a non-negative whole number",
        field=field,
    )
    # Whole numbers only: "3.5", "12abc" and floats are rejected
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None, error
    if isinstance(value, bool) or not isinstance(value, int):
        return None, error
    if value < 0:
        return None, error
    return value, None


def validate_member_form(
    name: str,
    points: int | str,
    books_read: int | str,
    max_name_length: int = MAX_NAME_LENGTH,
) -> tuple[MemberForm | None, list[ShameListError]]:
    """
    Validate the member form before any call is made.

    Returns:
        Tuple of (form, errors). Form is None if validation fails.
    """
    errors: list[ShameListError] = []

    clean_name = (name or "").strip()
    if not clean_name:
        errors.append(
            ShameListError(
                code="name_required",
                message="Member name is required",
                field="name",
            )
        )
    elif len(clean_name) > max_name_length:
        errors.append(
            ShameListError(
                code="name_too_long",
                message=f"Member name must be {max_name_length} characters or less",
                field="name",
            )
        )

    parsed_points, points_error = _parse_count(points, "points", "Points")
    if points_error:
        errors.append(points_error)
    parsed_books, books_error = _parse_count(books_read, "books_read", "Books read")
    if books_error:
        errors.append(books_error)

    if errors or parsed_points is None or parsed_books is None:
        return None, errors
    return MemberForm(name=clean_name, points=parsed_points, books_read=parsed_books), []


def member_payload(
    form: MemberForm,
    member_id: int | None,
    club_id: str,
) -> dict[str, Any]:
    """
    Body for the member write. Never carries shame list data.

    New members are attached to the club; edits leave club links alone.
    """
    fields = {"name": form.name, "points": form.points, "books_read": form.books_read}
    if member_id is None:
        return {**fields, "clubs": [club_id]}
    return {"id": member_id, **fields}


def plan_shame_list_write(
    current: list[int],
    member_id: int,
    desired: bool,
) -> list[int] | None:
    """
    Full replacement shame_list, or None when no club write is needed.

    `current` is the shame list of the snapshot the form was opened with.
    The result never holds member_id more than once.
    """
    if (member_id in current) == desired:
        return None
    if desired:
        return [*current, member_id]
    return [mid for mid in current if mid != member_id]


def plan_stale_prune(club: Club) -> list[int] | None:
    """Shame list without ids of members no longer in the club, or None."""
    stale = club.stale_shame_ids()
    if not stale:
        return None
    return [mid for mid in club.shame_list if mid not in stale]
