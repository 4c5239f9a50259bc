# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone


class FakeStorage:
    """
    In-memory KeyValueStorage used for unit tests.

    - Captures writes for assertions ("did this operation persist?")
    """

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes: list[tuple[str, str]] = []

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes.append((key, value))

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self.items)


class FakeClock:
    """Deterministic clock: returns the same instant until advanced."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class SequentialIds:
    """Deterministic id factory: t1, t2, t3..."""

    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}{self.n}"


class FailingStorage(FakeStorage):
    """FakeStorage whose writes raise `error` while it is set (simulates a broken disk/DB)."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        super().__init__(items)
        self.error: Exception | None = None

    def set_item(self, key: str, value: str) -> None:
        if self.error is not None:
            raise self.error
        super().set_item(key, value)
