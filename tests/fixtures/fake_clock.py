from datetime import UTC, datetime, timedelta

from src.app.services.clock import Clock


class FakeClock(Clock):
    """Clock pinned to an instant that tests move by hand"""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current
