"""
Clock Interface.

Date validation (due dates, discussion dates) compares against "today";
injecting the clock keeps those rules testable.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol


class ClockPort(Protocol):
    """Clock interface."""

    def now(self) -> datetime:
        """Current time as naive UTC."""
        ...

    def today(self) -> date:
        """Current UTC date."""
        ...
