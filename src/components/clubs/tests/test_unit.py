"""
Clubs component unit tests.
"""

from __future__ import annotations

from typing import Any

import pytest

from src.components.clubs import (
    CreateClubInput,
    DeleteClubInput,
    create_club_payload,
    run_create_club,
    run_delete_club,
    validate_club_name,
)
from src.components.selection import SelectionState
from src.core.ports.gateways import GatewayError
from src.domain.entities import Club, Server

# --- Mock Gateway ---


class MockClubGateway:
    def __init__(self) -> None:
        self.created: list[dict[str, Any]] = []
        self.deleted: list[tuple[str, str]] = []
        self.error: GatewayError | None = None

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        if self.error:
            raise self.error
        self.created.append(payload)
        return payload

    def delete(self, club_id: str, server_id: str) -> None:
        if self.error:
            raise self.error
        self.deleted.append((club_id, server_id))


@pytest.fixture
def clubs() -> MockClubGateway:
    return MockClubGateway()


@pytest.fixture
def state() -> SelectionState:
    return SelectionState(
        servers=[Server(id="srv", name="Server")],
        server_id="srv",
        club=Club(id="c1", name="Classics", server_id="srv"),
    )


# --- Functional Core ---


def test_validate_club_name() -> None:
    assert validate_club_name("Classics") == []
    assert validate_club_name("  ")[0].code == "name_required"
    assert validate_club_name("x" * 101)[0].code == "name_too_long"


@pytest.mark.parametrize(
    ("channel", "expected"),
    [("#general", "general"), ("general", "general"), ("", None), (None, None), ("  ", None)],
)
def test_create_club_payload_channel(channel: str | None, expected: str | None) -> None:
    payload = create_club_payload("id-1", " Classics ", "srv", channel)
    assert payload == {
        "id": "id-1",
        "name": "Classics",
        "server_id": "srv",
        "discord_channel": expected,
    }


# --- Create ---


class TestRunCreateClub:
    def test_create(self, clubs: MockClubGateway) -> None:
        result = run_create_club(
            CreateClubInput("Classics", "#books"), "srv", clubs=clubs, id_factory=lambda: "new"
        )

        assert result.success is True
        assert result.club_id == "new"
        assert clubs.created[0]["discord_channel"] == "books"

    def test_invalid_name_issues_no_call(self, clubs: MockClubGateway) -> None:
        result = run_create_club(CreateClubInput(""), "srv", clubs=clubs)

        assert result.success is False
        assert clubs.created == []

    def test_requires_server(self, clubs: MockClubGateway) -> None:
        result = run_create_club(CreateClubInput("Classics"), None, clubs=clubs)
        assert result.errors[0].code == "no_server_selected"

    def test_gateway_failure(self, clubs: MockClubGateway) -> None:
        clubs.error = GatewayError("club", "POST", "duplicate", 409)

        result = run_create_club(CreateClubInput("Classics"), "srv", clubs=clubs)

        assert result.success is False
        assert result.club_id is None
        assert result.errors[0].message == "duplicate"


# --- Delete ---


class TestRunDeleteClub:
    def test_delete_selected_club_clears_pane(
        self, clubs: MockClubGateway, state: SelectionState
    ) -> None:
        result = run_delete_club(DeleteClubInput("c1"), state, clubs=clubs)

        assert result.success is True
        assert result.selection_cleared is True
        assert clubs.deleted == [("c1", "srv")]
        assert state.club is None
        assert state.server_id == "srv"

    def test_delete_other_club_keeps_pane(
        self, clubs: MockClubGateway, state: SelectionState
    ) -> None:
        result = run_delete_club(DeleteClubInput("c2"), state, clubs=clubs)

        assert result.selection_cleared is False
        assert state.club is not None

    def test_failure_changes_nothing(self, clubs: MockClubGateway, state: SelectionState) -> None:
        clubs.error = GatewayError("club", "DELETE", "forbidden", 403)

        result = run_delete_club(DeleteClubInput("c1"), state, clubs=clubs)

        assert result.success is False
        assert state.club is not None
        assert state.club.id == "c1"

    def test_requires_server(self, clubs: MockClubGateway) -> None:
        result = run_delete_club(DeleteClubInput("c1"), SelectionState(), clubs=clubs)

        assert result.errors[0].code == "no_server_selected"
        assert clubs.deleted == []
