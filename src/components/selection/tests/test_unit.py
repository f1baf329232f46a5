"""
Selection component unit tests.

Tests for server/club selection and refresh behaviour.
"""

from __future__ import annotations

import pytest

from src.components.selection import (
    RefreshServersInput,
    SelectClubInput,
    SelectionState,
    SelectServerInput,
    resolve_server_selection,
    run_refresh_servers,
    run_select_club,
    run_select_server,
)
from src.core.ports.gateways import GatewayError
from src.domain.entities import Club, Server

# --- Mock Gateways ---


class MockServerGateway:
    """Returns a configurable server list, or fails."""

    def __init__(self, servers: list[Server]) -> None:
        self.servers = servers
        self.error: GatewayError | None = None
        self.calls = 0

    def list_servers(self) -> list[Server]:
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.servers)


class MockClubGateway:
    """In-memory club lookup keyed by (club_id, server_id)."""

    def __init__(self) -> None:
        self.clubs: dict[tuple[str, str], Club] = {}
        self.error: GatewayError | None = None

    def get(self, club_id: str, server_id: str) -> Club:
        if self.error:
            raise self.error
        try:
            return self.clubs[(club_id, server_id)]
        except KeyError:
            raise GatewayError("club", "GET", "Club not found", 404) from None


def _server(server_id: str) -> Server:
    return Server(id=server_id, name=server_id.upper())


def _club(club_id: str, server_id: str = "a") -> Club:
    return Club(id=club_id, name=club_id, server_id=server_id)


@pytest.fixture
def state() -> SelectionState:
    return SelectionState(servers=[_server("a"), _server("b")], server_id="a")


# --- Resolve Tests ---


class TestResolveServerSelection:
    """Fallback-to-first policy."""

    def test_keeps_previous_when_present(self) -> None:
        servers = [_server("a"), _server("b")]
        assert resolve_server_selection(servers, "b", preserve=True) == "b"

    def test_falls_back_to_first_when_previous_gone(self) -> None:
        servers = [_server("a"), _server("c")]
        assert resolve_server_selection(servers, "b", preserve=True) == "a"

    def test_ignores_previous_without_preserve(self) -> None:
        servers = [_server("a"), _server("b")]
        assert resolve_server_selection(servers, "b", preserve=False) == "a"

    def test_empty_list_selects_nothing(self) -> None:
        assert resolve_server_selection([], "a", preserve=True) is None


# --- Select Server Tests ---


class TestSelectServer:
    """Test server selection."""

    def test_select_server_clears_club(self, state: SelectionState) -> None:
        state.club = _club("c1")
        result = run_select_server(SelectServerInput("b"), state)

        assert result.success is True
        assert state.server_id == "b"
        assert state.club is None

    def test_select_unknown_server_rejected(self, state: SelectionState) -> None:
        state.club = _club("c1")
        result = run_select_server(SelectServerInput("zzz"), state)

        assert result.success is False
        assert result.errors[0].code == "server_not_found"
        assert state.server_id == "a"
        assert state.club is not None


# --- Refresh Tests ---


class TestRefreshServers:
    """Test server list refresh."""

    def test_refresh_preserves_selection(self, state: SelectionState) -> None:
        state.server_id = "b"
        gateway = MockServerGateway([_server("a"), _server("b")])

        result = run_refresh_servers(RefreshServersInput(True), state, gateway)

        assert result.success is True
        assert state.server_id == "b"

    def test_refresh_without_preserve_selects_first(self, state: SelectionState) -> None:
        state.server_id = "b"
        gateway = MockServerGateway([_server("a"), _server("b")])

        run_refresh_servers(RefreshServersInput(False), state, gateway)

        assert state.server_id == "a"

    def test_refresh_falls_back_when_server_vanished(self, state: SelectionState) -> None:
        state.server_id = "b"
        state.club = _club("c1", "b")
        gateway = MockServerGateway([_server("a")])

        run_refresh_servers(RefreshServersInput(True), state, gateway)

        assert state.server_id == "a"
        assert state.club is None

    def test_refresh_keeps_club_when_server_unchanged(self, state: SelectionState) -> None:
        state.club = _club("c1")
        gateway = MockServerGateway([_server("a"), _server("b")])

        run_refresh_servers(RefreshServersInput(True), state, gateway)

        assert state.club is not None
        assert state.club.id == "c1"

    def test_refresh_empty_list(self, state: SelectionState) -> None:
        gateway = MockServerGateway([])

        run_refresh_servers(RefreshServersInput(True), state, gateway)

        assert state.servers == []
        assert state.server_id is None

    def test_refresh_failure_leaves_state(self, state: SelectionState) -> None:
        gateway = MockServerGateway([])
        gateway.error = GatewayError("server", "GET", "boom", 500)

        result = run_refresh_servers(RefreshServersInput(True), state, gateway)

        assert result.success is False
        assert result.errors[0].message == "boom"
        assert [s.id for s in state.servers] == ["a", "b"]
        assert state.server_id == "a"


# --- Select Club Tests ---


class TestSelectClub:
    """Test club fetch and selection."""

    def test_select_club_replaces_state(self, state: SelectionState) -> None:
        gateway = MockClubGateway()
        gateway.clubs[("c2", "a")] = _club("c2")
        state.club = _club("c1")

        result = run_select_club(SelectClubInput("c2"), state, gateway)

        assert result.success is True
        assert state.club is not None
        assert state.club.id == "c2"

    def test_select_club_failure_keeps_previous(self, state: SelectionState) -> None:
        gateway = MockClubGateway()
        gateway.error = GatewayError("club", "GET", "timeout")
        previous = _club("c1")
        state.club = previous

        result = run_select_club(SelectClubInput("c2"), state, gateway)

        assert result.success is False
        assert result.errors[0].message == "timeout"
        assert state.club is previous

    def test_select_club_without_server(self) -> None:
        state = SelectionState()
        result = run_select_club(SelectClubInput("c1"), state, MockClubGateway())

        assert result.success is False
        assert result.errors[0].code == "no_server_selected"
