"""
In-Memory Gateway Backend.

Dict-backed stand-in for the hosted edge functions. Implements all four
gateway ports with the server-side behaviour the dashboard relies on.
Used for tests and the CLI demo mode.

Key behaviors:
- Every call is recorded in `calls` (including calls that fail)
- `fail_next()` makes the next matching call raise GatewayError
- Club GET assembles the nested record (members, sessions) on each read
- Club PUT patches only the supplied fields
- Member POST assigns integer ids
- Session POST makes the new session active, archiving the previous one
- Session PUT replaces the supplied fields, then drops discussion_ids_to_delete
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from src.core.ports.gateways import GatewayError, Gateways
from src.domain.entities import Club, Member, Server

logger = logging.getLogger(__name__)


@dataclass
class GatewayCall:
    """Record of an issued call for test assertions."""

    resource: str
    method: str
    payload: dict[str, Any]


@dataclass
class InMemoryBackend:
    servers: dict[str, dict[str, Any]] = field(default_factory=dict)
    clubs: dict[str, dict[str, Any]] = field(default_factory=dict)
    members: dict[int, dict[str, Any]] = field(default_factory=dict)
    sessions: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: list[GatewayCall] = field(default_factory=list)
    _failures: dict[tuple[str, str], GatewayError] = field(default_factory=dict)
    _next_member_id: int = 1

    # --- Seeding ---

    def add_server(self, server_id: str, name: str) -> str:
        self.servers[server_id] = {"id": server_id, "name": name}
        return server_id

    def add_club(
        self,
        club_id: str,
        name: str,
        server_id: str,
        discord_channel: str | None = None,
        shame_list: list[int] | None = None,
    ) -> str:
        self.clubs[club_id] = {
            "id": club_id,
            "name": name,
            "server_id": server_id,
            "discord_channel": discord_channel,
            "shame_list": list(shame_list or []),
            "active_session_id": None,
            "past_session_ids": [],
        }
        return club_id

    def add_member(
        self,
        name: str,
        clubs: list[str] | None = None,
        points: int = 0,
        books_read: int = 0,
        member_id: int | None = None,
    ) -> int:
        if member_id is None:
            member_id = self._next_member_id
        self._next_member_id = max(self._next_member_id, member_id + 1)
        self.members[member_id] = {
            "id": member_id,
            "name": name,
            "points": points,
            "books_read": books_read,
            "clubs": list(clubs or []),
        }
        return member_id

    def add_session(
        self,
        club_id: str,
        book: dict[str, Any],
        due_date: str,
        discussions: list[dict[str, Any]] | None = None,
        session_id: str | None = None,
    ) -> str:
        session_id = session_id or str(uuid4())
        self.sessions[session_id] = {
            "id": session_id,
            "club_id": club_id,
            "book": dict(book),
            "due_date": due_date,
            "discussions": copy.deepcopy(discussions or []),
        }
        self._activate(club_id, session_id)
        return session_id

    # --- Fault injection & inspection ---

    def fail_next(
        self,
        resource: str,
        method: str,
        message: str = "Internal Server Error",
        status_code: int = 500,
    ) -> None:
        """Make the next `resource`/`method` call fail."""
        self._failures[(resource, method)] = GatewayError(
            resource, method, message, status_code
        )

    def calls_to(self, resource: str, method: str | None = None) -> list[GatewayCall]:
        return [
            c
            for c in self.calls
            if c.resource == resource and (method is None or c.method == method)
        ]

    def gateways(self) -> Gateways:
        return Gateways(
            servers=_ServerView(self),
            clubs=_ClubView(self),
            members=_MemberView(self),
            sessions=_SessionView(self),
        )

    # --- Internals ---

    def _record(self, resource: str, method: str, payload: dict[str, Any]) -> None:
        self.calls.append(GatewayCall(resource, method, copy.deepcopy(payload)))
        logger.debug("memory %s %s %s", method, resource, payload)
        failure = self._failures.pop((resource, method), None)
        if failure is not None:
            raise failure

    def _activate(self, club_id: str, session_id: str) -> None:
        club = self.clubs.get(club_id)
        if club is None:
            return
        previous = club["active_session_id"]
        if previous and previous != session_id:
            club["past_session_ids"].append(previous)
        club["active_session_id"] = session_id

    def _not_found(self, resource: str, method: str, what: str) -> GatewayError:
        return GatewayError(resource, method, f"{what} not found", 404)

    def _club_record(self, club_id: str) -> dict[str, Any]:
        club = self.clubs[club_id]
        members = [
            copy.deepcopy(m) for m in self.members.values() if club_id in m["clubs"]
        ]
        active = self.sessions.get(club["active_session_id"] or "")
        past = [
            {"id": sid, "due_date": self.sessions[sid]["due_date"]}
            for sid in club["past_session_ids"]
            if sid in self.sessions
        ]
        return {
            "id": club["id"],
            "name": club["name"],
            "discord_channel": club["discord_channel"],
            "server_id": club["server_id"],
            "members": members,
            "active_session": copy.deepcopy(active),
            "past_sessions": past,
            "shame_list": list(club["shame_list"]),
        }


class _ServerView:
    def __init__(self, backend: InMemoryBackend) -> None:
        self._b = backend

    def list_servers(self) -> list[Server]:
        self._b._record("server", "GET", {})
        servers = []
        for server in self._b.servers.values():
            clubs = [
                {
                    "id": c["id"],
                    "name": c["name"],
                    "discord_channel": c["discord_channel"],
                    "server_id": c["server_id"],
                }
                for c in self._b.clubs.values()
                if c["server_id"] == server["id"]
            ]
            servers.append(Server.model_validate({**server, "clubs": clubs}))
        return servers


class _ClubView:
    def __init__(self, backend: InMemoryBackend) -> None:
        self._b = backend

    def get(self, club_id: str, server_id: str) -> Club:
        self._b._record("club", "GET", {"id": club_id, "server_id": server_id})
        club = self._b.clubs.get(club_id)
        if club is None or club["server_id"] != server_id:
            raise self._b._not_found("club", "GET", "Club")
        return Club.model_validate(self._b._club_record(club_id))

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._b._record("club", "POST", payload)
        club_id = payload.get("id")
        server_id = payload.get("server_id")
        if not club_id or not payload.get("name") or not server_id:
            raise GatewayError("club", "POST", "id, name and server_id are required", 400)
        if server_id not in self._b.servers:
            raise self._b._not_found("club", "POST", "Server")
        if club_id in self._b.clubs:
            raise GatewayError("club", "POST", "Club already exists", 409)
        self._b.add_club(
            club_id,
            payload["name"],
            server_id,
            discord_channel=payload.get("discord_channel"),
        )
        return self._b._club_record(club_id)

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._b._record("club", "PUT", payload)
        club = self._b.clubs.get(payload.get("id", ""))
        if club is None:
            raise self._b._not_found("club", "PUT", "Club")
        for key in ("name", "discord_channel"):
            if key in payload:
                club[key] = payload[key]
        if "shame_list" in payload:
            club["shame_list"] = list(payload["shame_list"])
        return self._b._club_record(club["id"])

    def delete(self, club_id: str, server_id: str) -> dict[str, Any]:
        self._b._record("club", "DELETE", {"id": club_id, "server_id": server_id})
        club = self._b.clubs.get(club_id)
        if club is None or club["server_id"] != server_id:
            raise self._b._not_found("club", "DELETE", "Club")
        del self._b.clubs[club_id]
        for sid in [s for s, rec in self._b.sessions.items() if rec["club_id"] == club_id]:
            del self._b.sessions[sid]
        for member in self._b.members.values():
            if club_id in member["clubs"]:
                member["clubs"].remove(club_id)
        return {"message": "Club deleted successfully", "id": club_id}


class _MemberView:
    def __init__(self, backend: InMemoryBackend) -> None:
        self._b = backend

    def create(self, payload: dict[str, Any]) -> Member:
        self._b._record("member", "POST", payload)
        if not payload.get("name"):
            raise GatewayError("member", "POST", "name is required", 400)
        member_id = self._b.add_member(
            payload["name"],
            clubs=payload.get("clubs", []),
            points=payload.get("points", 0),
            books_read=payload.get("books_read", 0),
        )
        return Member.model_validate(self._b.members[member_id])

    def update(self, payload: dict[str, Any]) -> Member:
        self._b._record("member", "PUT", payload)
        member = self._b.members.get(payload.get("id", -1))
        if member is None:
            raise self._b._not_found("member", "PUT", "Member")
        for key in ("name", "points", "books_read", "clubs"):
            if key in payload:
                member[key] = copy.deepcopy(payload[key])
        return Member.model_validate(member)


class _SessionView:
    def __init__(self, backend: InMemoryBackend) -> None:
        self._b = backend

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._b._record("session", "POST", payload)
        club_id = payload.get("club_id", "")
        if club_id not in self._b.clubs:
            raise self._b._not_found("session", "POST", "Club")
        session_id = self._b.add_session(
            club_id,
            payload.get("book", {}),
            payload.get("due_date", ""),
        )
        return copy.deepcopy(self._b.sessions[session_id])

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._b._record("session", "PUT", payload)
        session = self._b.sessions.get(payload.get("id", ""))
        if session is None:
            raise self._b._not_found("session", "PUT", "Session")
        if "book" in payload:
            session["book"] = dict(payload["book"])
        if payload.get("due_date"):
            session["due_date"] = payload["due_date"]
        if "discussions" in payload:
            session["discussions"] = copy.deepcopy(payload["discussions"])
        to_delete = set(payload.get("discussion_ids_to_delete") or [])
        if to_delete:
            session["discussions"] = [
                d for d in session["discussions"] if d.get("id") not in to_delete
            ]
        return copy.deepcopy(session)


def build_demo_backend() -> InMemoryBackend:
    """Small seeded backend for the CLI demo mode."""
    backend = InMemoryBackend()
    backend.add_server("srv-readers", "Readers Guild")
    backend.add_server("srv-scifi", "Sci-Fi Corner")

    backend.add_club(
        "club-classics", "Classics Circle", "srv-readers", discord_channel="classics"
    )
    backend.add_club("club-mystery", "Mystery Night", "srv-readers")
    backend.add_club("club-dune", "Arrakis Readers", "srv-scifi", discord_channel="dune")

    ada = backend.add_member("Ada", clubs=["club-classics"], points=12, books_read=4)
    backend.add_member("Grace", clubs=["club-classics", "club-mystery"], points=7, books_read=2)
    backend.add_member("Linus", clubs=["club-dune"], points=3, books_read=1)
    backend.clubs["club-classics"]["shame_list"] = [ada]

    backend.add_session(
        "club-classics",
        {"title": "Middlemarch", "author": "George Eliot", "year": 1871},
        "2030-01-31",
        discussions=[
            {"id": "disc-1", "title": "Books I-II", "date": "2030-01-10", "location": "Library"},
            {"id": "disc-2", "title": "Finale", "date": "2030-01-28"},
        ],
    )
    backend.calls.clear()
    return backend
