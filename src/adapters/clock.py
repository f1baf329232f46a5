from datetime import UTC, date, datetime

from src.domain.dates import to_utc_naive


class SystemClock:
    """Naive UTC, matching how stored dates are parsed."""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock pinned to a given moment (tests, demos); naive moments are UTC."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return to_utc_naive(self.moment)

    def today(self) -> date:
        return self.now().date()
