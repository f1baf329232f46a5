"""
Discussion list rewrite.

Functional Core - pure functions over the discussions array. The Session
gateway only accepts whole-array replacement, so every operation produces
the complete new array.

Delete contract: the array sent is always pre-filtered, and the removed id
is also named in discussion_ids_to_delete. Whether the server trusts the
array or the id list, the stored result is the same.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any
from uuid import uuid4

from src.domain.dates import parse_date, parse_datetime, to_utc_naive
from src.domain.entities import Discussion

from .models import (
    AddDiscussion,
    DeleteDiscussion,
    DiscussionEdit,
    DiscussionError,
    DiscussionNotFound,
    DiscussionOp,
    EditDiscussion,
)

MAX_TITLE_LENGTH = 200


def new_discussion_id() -> str:
    return str(uuid4())


def _clean_location(location: str | None) -> str | None:
    if location is None:
        return None
    return location.strip() or None


# --- Validation ---


def validate_discussion(
    title: str,
    date_str: str,
    today: date,
    *,
    check_not_past: bool = True,
) -> list[DiscussionError]:
    """Title required; date required, parseable and (optionally) today or later."""
    errors: list[DiscussionError] = []

    clean_title = (title or "").strip()
    if not clean_title:
        errors.append(
            DiscussionError(
                code="title_required",
                message="Discussion title is required",
                field="title",
            )
        )
    elif len(clean_title) > MAX_TITLE_LENGTH:
        errors.append(
            DiscussionError(
                code="title_too_long",
                message=f"Discussion title must be {MAX_TITLE_LENGTH} characters or less",
                field="title",
            )
        )

    if not date_str:
        errors.append(
            DiscussionError(
                code="date_required",
                message="Discussion date is required",
                field="date",
            )
        )
        return errors

    parsed = parse_date(date_str)
    if parsed is None:
        errors.append(
            DiscussionError(
                code="date_invalid",
                message="Discussion date is not a valid date",
                field="date",
            )
        )
    elif check_not_past and parsed < today:
        errors.append(
            DiscussionError(
                code="date_in_past",
                message="Discussion date must be today or in the future",
                field="date",
            )
        )

    return errors


# --- Rewrite ---


def _index_of(current: Sequence[Discussion], discussion_id: str) -> int:
    for i, d in enumerate(current):
        if d.id == discussion_id:
            return i
    raise DiscussionNotFound(discussion_id)


def apply_discussion_edit(
    current: Sequence[Discussion],
    op: DiscussionOp,
    id_factory: Callable[[], str] = new_discussion_id,
) -> DiscussionEdit:
    """
    Produce the new discussions array for one operation.

    - Add: appended with a fresh id that is unique within the array
    - Edit: replaced at the same position
    - Delete: exactly that entry removed, order of the rest unchanged

    Raises:
        DiscussionNotFound: edit/delete of an id not in `current`.
    """
    if isinstance(op, AddDiscussion):
        taken = {d.id for d in current}
        new_id = id_factory()
        while new_id in taken:
            new_id = id_factory()
        added = Discussion(
            id=new_id,
            title=op.title.strip(),
            date=op.date,
            location=_clean_location(op.location),
        )
        return DiscussionEdit(discussions=(*current, added), discussion_id=new_id)

    if isinstance(op, EditDiscussion):
        index = _index_of(current, op.discussion_id)
        updated = Discussion(
            id=op.discussion_id,
            title=op.title.strip(),
            date=op.date,
            location=_clean_location(op.location),
        )
        items = list(current)
        items[index] = updated
        return DiscussionEdit(discussions=tuple(items), discussion_id=op.discussion_id)

    if isinstance(op, DeleteDiscussion):
        _index_of(current, op.discussion_id)
        remaining = tuple(d for d in current if d.id != op.discussion_id)
        return DiscussionEdit(
            discussions=remaining,
            discussion_id=op.discussion_id,
            deleted_ids=(op.discussion_id,),
        )

    raise TypeError(f"Unsupported discussion operation: {op!r}")


def build_session_payload(session_id: str, edit: DiscussionEdit) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": session_id,
        "discussions": [d.to_payload() for d in edit.discussions],
    }
    if edit.deleted_ids:
        payload["discussion_ids_to_delete"] = list(edit.deleted_ids)
    return payload


# --- Presentation ---


def _sort_key(discussion: Discussion) -> tuple[int, datetime]:
    parsed = parse_datetime(discussion.date)
    if parsed is None:
        return (1, datetime.max)
    return (0, parsed)


def sort_for_display(discussions: Sequence[Discussion]) -> list[Discussion]:
    """Date ascending; storage (insertion) order breaks ties."""
    return sorted(discussions, key=_sort_key)


def is_past(discussion: Discussion, now: datetime) -> bool:
    """Both sides compared as naive UTC; an aware `now` is converted."""
    parsed = parse_datetime(discussion.date)
    return parsed is not None and parsed < to_utc_naive(now)
