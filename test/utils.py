from datetime import datetime, timedelta, timezone


def auth_header(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


class FakeClock:
    """Controllable stand-in for utc_now"""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta
