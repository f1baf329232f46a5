"""
Discussions component - Data models.

Discussions live inside a Session and have no gateway of their own; every
change is sent as a Session PUT carrying the whole discussions array.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import Discussion

# --- Errors ---


@dataclass(frozen=True)
class DiscussionError:
    """Discussion validation or write error."""

    code: str
    message: str
    field: str | None = None


class DiscussionNotFound(LookupError):
    """Edit/delete named a discussion id that is not in the array."""

    def __init__(self, discussion_id: str) -> None:
        super().__init__(f"Discussion {discussion_id} not found")
        self.discussion_id = discussion_id


# --- Operations ---


@dataclass(frozen=True)
class AddDiscussion:
    """Append a discussion; the id is generated client-side."""

    title: str
    date: str
    location: str | None = None


@dataclass(frozen=True)
class EditDiscussion:
    """Replace a discussion in place, keeping its position."""

    discussion_id: str
    title: str
    date: str
    location: str | None = None


@dataclass(frozen=True)
class DeleteDiscussion:
    """Remove exactly one discussion."""

    discussion_id: str


DiscussionOp = AddDiscussion | EditDiscussion | DeleteDiscussion


# --- Results ---


@dataclass(frozen=True)
class DiscussionEdit:
    """New discussions array produced by applying one operation."""

    discussions: tuple[Discussion, ...]
    discussion_id: str
    deleted_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class DiscussionOutput:
    """Output from a discussion operation."""

    discussions: tuple[Discussion, ...]
    discussion_id: str | None
    errors: tuple[DiscussionError, ...]
    success: bool
