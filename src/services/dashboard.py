"""
ClubDashboard - orchestrates the components around one owned selection state.

Every operation runs its gateway calls one after another and then re-reads
the affected entity (server list or nested club) instead of patching local
state from write responses. state.error holds the message of the last
failed operation for the view to show.
"""

from __future__ import annotations

import logging
from typing import Any

from src.adapters.clock import SystemClock
from src.components.clubs import (
    ClubOperationOutput,
    CreateClubInput,
    DeleteClubInput,
    run_create_club,
    run_delete_club,
)
from src.components.discussions import (
    AddDiscussion,
    DeleteDiscussion,
    DiscussionOutput,
    EditDiscussion,
    run_add_discussion,
    run_delete_discussion,
    run_edit_discussion,
    sort_for_display,
)
from src.components.selection import (
    RefreshServersInput,
    SelectClubInput,
    SelectionOutput,
    SelectionState,
    SelectServerInput,
    run_refresh_servers,
    run_select_club,
    run_select_server,
)
from src.components.sessions import (
    CreateSessionInput,
    SessionOperationOutput,
    UpdateBookInput,
    run_create_session,
    run_update_book,
)
from src.components.shame_list import (
    PruneOutput,
    SaveMemberInput,
    SaveMemberOutput,
    is_on_shame_list,
    run_prune_shame_list,
    run_save_member,
)
from src.core.ports.gateways import Gateways
from src.core.ports.time import ClockPort
from src.domain.entities import Club, Discussion

logger = logging.getLogger(__name__)

# Error codes meaning a write reached (or may have reached) the backend
_WRITE_ISSUED_CODES = {"gateway_error", "shame_list_failed"}


class NoClubSelectedError(RuntimeError):
    """A club-scoped operation was invoked with no club shown."""


def _write_issued(output: Any) -> bool:
    if output.success:
        return True
    return any(e.code in _WRITE_ISSUED_CODES for e in output.errors)


class ClubDashboard:
    def __init__(
        self,
        gateways: Gateways,
        state: SelectionState | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        self.gateways = gateways
        self.state = state if state is not None else SelectionState()
        self.clock = clock or SystemClock()

    # --- Helpers ---

    def _begin(self) -> None:
        self.state.error = None

    def _report(self, output: Any) -> Any:
        if output.errors and self.state.error is None:
            self.state.error = output.errors[0].message
        return output

    def _require_club(self) -> Club:
        if self.state.club is None:
            raise NoClubSelectedError("No club selected")
        return self.state.club

    def _reload_club(self, club_id: str) -> SelectionOutput:
        """Re-read the nested club; a failure here never masks the operation's own error."""
        return self._report(
            run_select_club(SelectClubInput(club_id), self.state, self.gateways.clubs)
        )

    def _after_club_write(self, club_id: str, output: Any) -> Any:
        self._report(output)
        if _write_issued(output):
            logger.debug("Re-reading club %s after write", club_id)
            self._reload_club(club_id)
        return output

    # --- Selection ---

    def load(self) -> SelectionOutput:
        """Initial load: fetch servers without preserving any selection."""
        return self.refresh_servers(preserve_selection=False)

    def refresh_servers(self, preserve_selection: bool = True) -> SelectionOutput:
        self._begin()
        return self._report(
            run_refresh_servers(
                RefreshServersInput(preserve_selection), self.state, self.gateways.servers
            )
        )

    def select_server(self, server_id: str) -> SelectionOutput:
        self._begin()
        return self._report(run_select_server(SelectServerInput(server_id), self.state))

    def select_club(self, club_id: str) -> SelectionOutput:
        self._begin()
        return self._reload_club(club_id)

    # --- Clubs ---

    def create_club(self, name: str, discord_channel: str | None = None) -> ClubOperationOutput:
        """Create a club, refresh the server list, then show the new club."""
        self._begin()
        output = self._report(
            run_create_club(
                CreateClubInput(name, discord_channel),
                self.state.server_id,
                clubs=self.gateways.clubs,
            )
        )
        if output.success and output.club_id:
            self._report(
                run_refresh_servers(RefreshServersInput(True), self.state, self.gateways.servers)
            )
            self._reload_club(output.club_id)
        return output

    def delete_club(self, club_id: str) -> ClubOperationOutput:
        """Delete a club; the server selection survives the refresh."""
        self._begin()
        output = self._report(
            run_delete_club(DeleteClubInput(club_id), self.state, clubs=self.gateways.clubs)
        )
        if output.success:
            self._report(
                run_refresh_servers(RefreshServersInput(True), self.state, self.gateways.servers)
            )
        return output

    # --- Members & shame list ---

    def save_member(self, inp: SaveMemberInput) -> SaveMemberOutput:
        """
        Save a member and reconcile the shame list.

        After a partial failure the club is still re-read so the view shows
        what the backend actually holds.
        """
        self._begin()
        snapshot = self._require_club()
        output = run_save_member(
            inp,
            snapshot,
            members=self.gateways.members,
            clubs=self.gateways.clubs,
        )
        return self._after_club_write(snapshot.id, output)

    def prune_shame_list(self) -> PruneOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_prune_shame_list(snapshot, clubs=self.gateways.clubs)
        if output.success and not output.removed_ids:
            return output
        return self._after_club_write(snapshot.id, output)

    # --- Discussions ---

    def add_discussion(self, title: str, date: str, location: str | None = None) -> DiscussionOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_add_discussion(
            AddDiscussion(title, date, location),
            snapshot,
            sessions=self.gateways.sessions,
            clock=self.clock,
        )
        return self._after_club_write(snapshot.id, output)

    def edit_discussion(
        self,
        discussion_id: str,
        title: str,
        date: str,
        location: str | None = None,
    ) -> DiscussionOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_edit_discussion(
            EditDiscussion(discussion_id, title, date, location),
            snapshot,
            sessions=self.gateways.sessions,
            clock=self.clock,
        )
        return self._after_club_write(snapshot.id, output)

    def delete_discussion(self, discussion_id: str) -> DiscussionOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_delete_discussion(
            DeleteDiscussion(discussion_id),
            snapshot,
            sessions=self.gateways.sessions,
        )
        return self._after_club_write(snapshot.id, output)

    # --- Sessions ---

    def create_session(self, inp: CreateSessionInput) -> SessionOperationOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_create_session(
            inp, snapshot, sessions=self.gateways.sessions, clock=self.clock
        )
        return self._after_club_write(snapshot.id, output)

    def update_book(self, inp: UpdateBookInput) -> SessionOperationOutput:
        self._begin()
        snapshot = self._require_club()
        output = run_update_book(inp, snapshot, sessions=self.gateways.sessions)
        return self._after_club_write(snapshot.id, output)

    # --- Presentation helpers ---

    def sorted_discussions(self) -> list[Discussion]:
        club = self.state.club
        if club is None or club.active_session is None:
            return []
        return sort_for_display(club.active_session.discussions)

    def shame_flags(self) -> dict[int, bool]:
        club = self.state.club
        if club is None:
            return {}
        return {m.id: is_on_shame_list(club, m.id) for m in club.members}
