import pytest

from src.adapters.memory_gateways import InMemoryBackend, build_demo_backend
from src.core.ports.gateways import GatewayError


def test_club_get_assembles_nested_record(backend):
    club = backend.gateways().clubs.get("c1", "srv-1")

    assert [m.id for m in club.members] == [7]
    assert club.active_session is not None
    assert club.active_session.id == "s1"
    assert [d.id for d in club.active_session.discussions] == ["d1", "d2"]


def test_club_get_wrong_server_is_not_found(backend):
    with pytest.raises(GatewayError) as exc:
        backend.gateways().clubs.get("c1", "srv-2")
    assert exc.value.status_code == 404


def test_server_list_embeds_clubs(backend):
    servers = backend.gateways().servers.list_servers()

    assert [s.id for s in servers] == ["srv-1", "srv-2"]
    assert [c.id for c in servers[0].clubs] == ["c1", "c2"]


def test_calls_recorded_in_order(backend):
    gw = backend.gateways()
    gw.servers.list_servers()
    gw.clubs.get("c1", "srv-1")

    assert [(c.resource, c.method) for c in backend.calls] == [
        ("server", "GET"),
        ("club", "GET"),
    ]


def test_fail_next_fails_once(backend):
    gw = backend.gateways()
    backend.fail_next("club", "GET", "flaky", 503)

    with pytest.raises(GatewayError, match="flaky"):
        gw.clubs.get("c1", "srv-1")
    assert gw.clubs.get("c1", "srv-1").id == "c1"
    assert len(backend.calls_to("club", "GET")) == 2


def test_member_create_assigns_next_id(backend):
    member = backend.gateways().members.create({"name": "Bo", "clubs": ["c1"]})

    assert member.id == 8
    assert backend.members[8]["clubs"] == ["c1"]


def test_club_put_patches_only_supplied_fields(backend):
    backend.gateways().clubs.update({"id": "c1", "shame_list": [7]})

    assert backend.clubs["c1"]["shame_list"] == [7]
    assert backend.clubs["c1"]["name"] == "Classics Circle"
    assert backend.clubs["c1"]["discord_channel"] == "classics"


def test_club_delete_cascades(backend):
    backend.gateways().clubs.delete("c1", "srv-1")

    assert "c1" not in backend.clubs
    assert "s1" not in backend.sessions
    assert backend.members[7]["clubs"] == []


def test_session_put_honours_delete_ids(backend):
    # array still holds d1 but the id list names it
    backend.gateways().sessions.update(
        {
            "id": "s1",
            "discussions": [
                {"id": "d1", "title": "Part one", "date": "2025-06-10"},
                {"id": "d2", "title": "Part two", "date": "2025-06-05"},
            ],
            "discussion_ids_to_delete": ["d1"],
        }
    )

    assert [d["id"] for d in backend.sessions["s1"]["discussions"]] == ["d2"]


def test_session_post_archives_previous(backend):
    created = backend.gateways().sessions.create(
        {"club_id": "c1", "book": {"title": "Emma", "author": "Jane Austen"}, "due_date": "2025-09-01"}
    )

    club = backend.gateways().clubs.get("c1", "srv-1")
    assert club.active_session is not None
    assert club.active_session.id == created["id"]
    assert [s.id for s in club.past_sessions] == ["s1"]


def test_session_post_unknown_club(backend):
    with pytest.raises(GatewayError) as exc:
        backend.gateways().sessions.create({"club_id": "nope", "book": {}, "due_date": ""})
    assert exc.value.status_code == 404


def test_add_member_explicit_id_advances_counter():
    b = InMemoryBackend()
    b.add_member("A", member_id=10)
    assert b.add_member("B") == 11


def test_demo_backend_is_consistent():
    b = build_demo_backend()
    gw = b.gateways()

    servers = gw.servers.list_servers()
    classics = gw.clubs.get("club-classics", "srv-readers")

    assert len(servers) == 2
    assert classics.stale_shame_ids() == []
    assert classics.shame_list == [classics.members[0].id]
    assert b.calls_to("server") != []
