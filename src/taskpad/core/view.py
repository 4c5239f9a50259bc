# src/taskpad/core/view.py

"""
View model: a presentation-agnostic snapshot of what the user should see.

A View is rebuilt from fresh store queries after every mutation, so a
renderer never reads stale state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..tasks.task_models import Task, TaskFilter
from .state import AppState

NO_FASTEST = "N/A"


@dataclass(frozen=True, slots=True)
class TaskRow:
    number: int  # 1-based position in the current view
    id: str
    text: str
    completed: bool
    created_at: datetime
    completed_at: datetime | None


@dataclass(frozen=True, slots=True)
class StatsView:
    total: int
    completed: int
    fastest: str


@dataclass(frozen=True, slots=True)
class View:
    filter: TaskFilter
    dark_mode: bool
    rows: tuple[TaskRow, ...]
    stats: StatsView

    def row(self, number: int) -> TaskRow | None:
        if 1 <= number <= len(self.rows):
            return self.rows[number - 1]
        return None


def format_duration(duration: timedelta) -> str:
    """
    Human-readable duration: "1h 2m 3s", "2m 5s", "7s".

    Hours are shown only when non-zero, minutes whenever the total is at
    least one minute, seconds always.
    """
    seconds = max(0, int(duration.total_seconds()))
    minutes = seconds // 60
    hours = minutes // 60

    out = ""
    if hours > 0:
        out += f"{hours}h "
    if minutes > 0:
        out += f"{minutes % 60}m "
    out += f"{seconds % 60}s"
    return out


def fastest_label(task: Task | None) -> str:
    if task is None:
        return NO_FASTEST
    duration = task.completion_duration()
    if duration is None:
        return NO_FASTEST
    return f'"{task.text}" ({format_duration(duration)})'


def build_view(state: AppState) -> View:
    tasks = state.tasks.query(state.current_filter)
    rows = tuple(
        TaskRow(
            number=i,
            id=t.id,
            text=t.text,
            completed=t.completed,
            created_at=t.created_at,
            completed_at=t.completed_at,
        )
        for i, t in enumerate(tasks, start=1)
    )
    stats = state.tasks.stats()
    return View(
        filter=state.current_filter,
        dark_mode=state.preferences.dark_mode,
        rows=rows,
        stats=StatsView(
            total=stats.total,
            completed=stats.completed,
            fastest=fastest_label(state.tasks.fastest_completed()),
        ),
    )
