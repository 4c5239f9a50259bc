# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (the persisted precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(dt: datetime) -> str:
    """
    Serialize a datetime the way a JavaScript Date is written to JSON:
    UTC, millisecond precision, "Z" suffix.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: object) -> datetime | None:
    """
    Parse a persisted timestamp.

    Accepts ISO-8601 strings (naive values are taken as UTC) and epoch
    milliseconds. Returns None for anything else.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str) and raw.strip():
        try:
            dt = datetime.fromisoformat(raw.strip())
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            return None
    return None


class TaskFilter(StrEnum):
    """Which subset of tasks a query returns."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | TaskFilter) -> TaskFilter:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown filter {raw!r} (expected one of: {choices})") from None


@dataclass(slots=True)
class Task:
    """
    One to-do item.

    Invariant: completed_at is set if and only if completed is True.
    """

    id: str
    text: str
    created_at: datetime
    completed: bool = False
    completed_at: datetime | None = None

    def toggle_completed(self, now: datetime | None = None) -> None:
        self.completed = not self.completed
        self.completed_at = (now or utc_now()) if self.completed else None

    def completion_duration(self) -> timedelta | None:
        if not self.completed or self.completed_at is None:
            return None
        return self.completed_at - self.created_at


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed
