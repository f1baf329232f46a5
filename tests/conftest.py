from datetime import datetime

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory_gateways import InMemoryBackend
from src.services.dashboard import ClubDashboard

TODAY = datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def backend():
    """
    Two servers; srv-1 holds c1 (with an active session) and c2.
    Member 7 belongs to c1 and is not on its shame list.
    """
    b = InMemoryBackend()
    b.add_server("srv-1", "Readers Guild")
    b.add_server("srv-2", "Sci-Fi Corner")
    b.add_club("c1", "Classics Circle", "srv-1", discord_channel="classics")
    b.add_club("c2", "Mystery Night", "srv-1")
    b.add_club("c3", "Arrakis Readers", "srv-2")
    b.add_member("Ada", clubs=["c1"], points=5, books_read=2, member_id=7)
    b.add_session(
        "c1",
        {"title": "Middlemarch", "author": "George Eliot"},
        "2025-07-01",
        discussions=[
            {"id": "d1", "title": "Part one", "date": "2025-06-10"},
            {"id": "d2", "title": "Part two", "date": "2025-06-05", "location": "Cafe"},
        ],
        session_id="s1",
    )
    b.calls.clear()
    return b


@pytest.fixture
def dashboard(backend, clock):
    """Dashboard loaded with srv-1 active and c1 shown."""
    d = ClubDashboard(backend.gateways(), clock=clock)
    d.load()
    d.select_club("c1")
    backend.calls.clear()
    return d
