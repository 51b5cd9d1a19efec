from datetime import datetime, timedelta, timezone

START = datetime(2024, 3, 14, 18, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_players(count=3):
    return [{"name": f"Player{i}", "mobile": f"98765432{i:02d}"} for i in range(1, count + 1)]
