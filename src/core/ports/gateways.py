"""
Entity Gateway Interfaces.

Protocol-based interfaces for the four independently addressable remote
resources (server, club, member, session). Each resource accepts whole-object
writes and returns the stored record or fails.

Key properties:
- No cross-resource transactions exist
- Writes replace the fields supplied (arrays are replaced whole)
- Callers issue calls one at a time; nothing here retries

Implementation strategies:
1. EdgeFunctionGateways: HTTP calls to the hosted edge functions
2. InMemoryBackend: dict-backed backend for tests and demos

Both implement every port below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from src.domain.entities import Club, Member, Server

Resource = Literal["server", "club", "member", "session"]
Method = Literal["GET", "POST", "PUT", "DELETE"]


class GatewayError(Exception):
    """A remote call failed (transport error or non-success response)."""

    def __init__(
        self,
        resource: str,
        method: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.resource = resource
        self.method = method
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ServerGatewayPort(Protocol):
    """Read-only server list."""

    def list_servers(self) -> list[Server]:
        """GET server -> {servers: [...]}."""
        ...


class ClubGatewayPort(Protocol):
    """Club resource."""

    def get(self, club_id: str, server_id: str) -> Club:
        """GET club?id=&server_id= -> fully nested club."""
        ...

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST {id, name, server_id, discord_channel?}."""
        ...

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        """PUT {id, server_id, ...fields} - notably shame_list."""
        ...

    def delete(self, club_id: str, server_id: str) -> dict[str, Any]:
        """DELETE club?id=&server_id=."""
        ...


class MemberGatewayPort(Protocol):
    """Member resource."""

    def create(self, payload: dict[str, Any]) -> Member:
        """POST {name, points, books_read, clubs} -> created member (with id)."""
        ...

    def update(self, payload: dict[str, Any]) -> Member:
        """PUT {id, name, points, books_read} -> updated member."""
        ...


class SessionGatewayPort(Protocol):
    """Session resource (discussions are embedded, no gateway of their own)."""

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST {club_id, book, due_date}."""
        ...

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        """PUT {id, book?, due_date?, discussions?, discussion_ids_to_delete?}."""
        ...


@dataclass(frozen=True)
class Gateways:
    """The four resources, wired once and handed to the dashboard."""

    servers: ServerGatewayPort
    clubs: ClubGatewayPort
    members: MemberGatewayPort
    sessions: SessionGatewayPort
    # Releases shared resources (the HTTP client); empty for in-memory wiring
    closers: tuple[Callable[[], None], ...] = ()

    def close(self) -> None:
        for closer in self.closers:
            closer()

    def __enter__(self) -> Gateways:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
