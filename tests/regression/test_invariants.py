"""
Regression tests for the dashboard's write invariants.

R1-R4 cover shame list reconciliation, R5-R6 discussion array rewrites,
R7 club deletion, R8 call ordering of the member/shame list dual write.
"""

import pytest

from src.components.discussions import AddDiscussion, apply_discussion_edit
from src.components.shame_list import SaveMemberInput


def _sequence(backend):
    return [(c.resource, c.method) for c in backend.calls]


# --- R1: No-op toggle ---
@pytest.mark.parametrize("on_shame_list", [True, False])
def test_R1_unchanged_membership_issues_no_club_write(dashboard, backend, on_shame_list):
    """R1: Saving a member whose shame status is unchanged never writes the club."""
    if on_shame_list:
        backend.clubs["c1"]["shame_list"] = [7]
        dashboard.select_club("c1")
        backend.calls.clear()

    dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=on_shame_list, member_id=7))

    assert backend.calls_to("club", "PUT") == []


# --- R2: Set semantics ---
def test_R2_member_listed_at_most_once(dashboard, backend):
    """R2: Repeated 'on' saves leave exactly one entry for the member."""
    for _ in range(3):
        dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=True, member_id=7))

    assert backend.clubs["c1"]["shame_list"].count(7) == 1
    assert len(backend.calls_to("club", "PUT")) == 1


# --- R3: Other entries preserved ---
def test_R3_toggle_preserves_other_entries(dashboard, backend):
    """R3: Removing one member keeps the rest of the list in order."""
    backend.add_member("Bo", clubs=["c1"], member_id=8)
    backend.add_member("Cy", clubs=["c1"], member_id=9)
    backend.clubs["c1"]["shame_list"] = [9, 7, 8]
    dashboard.select_club("c1")

    dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=False, member_id=7))

    assert backend.clubs["c1"]["shame_list"] == [9, 8]


# --- R4: Member record never carries shame data ---
def test_R4_member_payload_has_no_shame_fields(dashboard, backend):
    """R4: Shame membership lives on the club only."""
    dashboard.save_member(SaveMemberInput(name="Bo", on_shame_list=True))
    dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=True, member_id=7))

    for call in backend.calls_to("member"):
        assert "shame_list" not in call.payload
        assert "on_shame_list" not in call.payload


# --- R5: Add grows by one with a unique id ---
def test_R5_add_discussion_grows_by_one(dashboard, backend):
    """R5: Each add appends exactly one discussion with an id not already present."""
    before = [d.id for d in dashboard.state.club.active_session.discussions]

    result = dashboard.add_discussion("Part three", "2025-06-20")

    after = [d.id for d in dashboard.state.club.active_session.discussions]
    assert len(after) == len(before) + 1
    assert result.discussion_id not in before
    assert len(set(after)) == len(after)


def test_R5_colliding_generated_id_is_replaced(dashboard):
    """R5: A generated id that already exists is never reused."""
    current = dashboard.state.club.active_session.discussions
    ids = iter(["d1", "d2", "d3"])

    edit = apply_discussion_edit(current, AddDiscussion("T", "2025-06-20"), lambda: next(ids))

    assert edit.discussion_id == "d3"


# --- R6: Delete removes exactly one ---
def test_R6_delete_removes_exactly_one(dashboard, backend):
    """R6: Deleting removes the named discussion and nothing else."""
    dashboard.add_discussion("Part three", "2025-06-20")
    before = list(dashboard.state.club.active_session.discussions)

    dashboard.delete_discussion("d2")

    after = list(dashboard.state.club.active_session.discussions)
    assert after == [d for d in before if d.id != "d2"]


# --- R7: Deleting the shown club ---
def test_R7_deleting_selected_club_clears_it_keeps_server(dashboard, backend):
    """R7: The club pane empties, the server stays selected and no longer lists the club."""
    dashboard.delete_club("c1")

    assert dashboard.state.club is None
    assert dashboard.state.server_id == "srv-1"
    server = dashboard.state.selected_server()
    assert [c.id for c in server.clubs] == ["c2"]


# --- R8: Dual write ordering and failure modes ---
def test_R8_member_before_club(dashboard, backend):
    """R8: Scenario: member 7 of c1 is put on the shame list."""
    result = dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=True, member_id=7))

    assert result.outcome == "succeeded"
    assert _sequence(backend) == [("member", "PUT"), ("club", "PUT"), ("club", "GET")]
    assert backend.calls_to("club", "PUT")[0].payload["shame_list"] == [7]
    assert dashboard.shame_flags()[7] is True


def test_R8_member_failure_skips_club_write(dashboard, backend):
    """R8: If the member write fails the club write is never attempted."""
    backend.fail_next("member", "PUT", "member locked", 423)

    result = dashboard.save_member(SaveMemberInput(name="Ada", on_shame_list=True, member_id=7))

    assert result.outcome == "failed"
    assert backend.calls_to("club", "PUT") == []
    assert dashboard.state.error == "member locked"
    assert backend.clubs["c1"]["shame_list"] == []


def test_R8_club_failure_is_partial_and_visible_after_refresh(dashboard, backend):
    """R8: Member saved, shame list not: outcome is partial and the refetch shows it."""
    backend.fail_next("club", "PUT", "shame list locked", 423)

    result = dashboard.save_member(SaveMemberInput(name="Bo", on_shame_list=True))

    assert result.outcome == "partial"
    assert result.any_write_persisted is True
    assert dashboard.state.error.startswith("Member saved but shame list update failed")
    club = dashboard.state.club
    new_id = result.member.id
    assert club.get_member(new_id) is not None
    assert new_id not in club.shame_list
    assert dashboard.shame_flags()[new_id] is False
