"""
Club validation and payloads.

Functional Core - pure business logic.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from .models import ClubError

MAX_NAME_LENGTH = 100


def new_club_id() -> str:
    return str(uuid4())


def validate_club_name(name: str, max_length: int = MAX_NAME_LENGTH) -> list[ClubError]:
    clean = (name or "").strip()
    if not clean:
        return [ClubError(code="name_required", message="Club name is required", field="name")]
    if len(clean) > max_length:
        return [
            ClubError(
                code="name_too_long",
                message=f"Club name must be {max_length} characters or less",
                field="name",
            )
        ]
    return []


def create_club_payload(
    club_id: str,
    name: str,
    server_id: str,
    discord_channel: str | None,
) -> dict[str, Any]:
    """An empty channel is sent as null."""
    channel = (discord_channel or "").strip().lstrip("#")
    return {
        "id": club_id,
        "name": name.strip(),
        "server_id": server_id,
        "discord_channel": channel or None,
    }
