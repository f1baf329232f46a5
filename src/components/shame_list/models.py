"""
Shame list component - Data models.

The "on shame list" flag is edited from the member form but stored as set
membership in Club.shame_list, so saving a member can take two writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from src.domain.entities import Member

# --- Outcome Types ---

# succeeded: every needed write persisted
# partial: the member write persisted, the club write did not
# failed: nothing was written
SaveOutcome = Literal["succeeded", "partial", "failed"]
WriteStep = Literal["member", "shame_list"]


# --- Errors ---


@dataclass(frozen=True)
class ShameListError:
    """Member save or shame list error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SaveMemberInput:
    """
    Input for creating (member_id=None) or editing a member.

    points/books_read accept the raw form strings.
    """

    name: str
    points: int | str = 0
    books_read: int | str = 0
    on_shame_list: bool = False
    member_id: int | None = None

    @property
    def is_new(self) -> bool:
        return self.member_id is None


@dataclass(frozen=True)
class MemberForm:
    """Validated member fields."""

    name: str
    points: int
    books_read: int


# --- Output Models ---


@dataclass(frozen=True)
class SaveMemberOutput:
    """Result of the member write plus the optional shame list write."""

    outcome: SaveOutcome
    member: Member | None
    completed_steps: tuple[WriteStep, ...]
    errors: tuple[ShameListError, ...]
    shame_list: tuple[int, ...] | None = None  # array sent to the club, if any
    club_written: bool = False

    @property
    def success(self) -> bool:
        return self.outcome == "succeeded"

    @property
    def any_write_persisted(self) -> bool:
        return bool(self.completed_steps)


@dataclass(frozen=True)
class PruneOutput:
    """Result of dropping stale ids from a club's shame list."""

    removed_ids: tuple[int, ...]
    errors: tuple[ShameListError, ...]
    success: bool
