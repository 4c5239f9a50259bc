# src/taskpad/tasks/task_store.py

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from ..core.ports import Clock, IdFactory, KeyValueStorage
from .task_models import Task, TaskFilter, TaskStats, format_timestamp, parse_timestamp, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "tasks"


def _new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """
    In-memory task collection persisted to a key/value storage entry.

    Lifecycle:
    - the collection is loaded once, at construction
    - every mutation (add/delete/toggle/clear) rewrites the whole entry

    The entry is a JSON array of
    {"id", "text", "completed", "createdAt", "completedAt"} objects.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_TASKS_KEY,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock: Clock = clock or utc_now
        self._new_id: IdFactory = id_factory or _new_task_id
        self._tasks: list[Task] = []
        self.load()
        logger.info("TaskStore ready key=%s total=%s", self._key, len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- (de)serialization ----

    @staticmethod
    def _task_to_record(task: Task) -> dict[str, Any]:
        return {
            "id": task.id,
            "text": task.text,
            "completed": task.completed,
            "createdAt": format_timestamp(task.created_at),
            "completedAt": format_timestamp(task.completed_at) if task.completed_at else None,
        }

    @staticmethod
    def _record_to_task(raw: Any) -> Task | None:
        if not isinstance(raw, dict):
            return None

        raw_id = raw.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            return None
        task_id = str(raw_id).strip()

        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            return None

        created_at = parse_timestamp(raw.get("createdAt"))
        if not task_id or created_at is None:
            return None

        completed = raw.get("completed") is True
        completed_at = parse_timestamp(raw.get("completedAt")) if completed else None
        if completed and completed_at is None:
            logger.warning("Task id=%s is marked completed without completedAt; loading as pending.", task_id)
            completed = False

        return Task(
            id=task_id,
            text=text.strip(),
            created_at=created_at,
            completed=completed,
            completed_at=completed_at,
        )

    # ---- persistence ----

    def load(self) -> None:
        """Replace the in-memory collection with the persisted one."""
        self._tasks = self._read()

    def _read(self) -> list[Task]:
        """
        Read the persisted collection.

        Missing entry -> empty list. Unparsable entry -> warning + empty list.
        Malformed or duplicate items are skipped.
        """
        raw = self._storage.get_item(self._key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Stored tasks under key=%s are not valid JSON; starting empty.", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored tasks under key=%s are not a JSON array; starting empty.", self._key)
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        for i, item in enumerate(data):
            task = self._record_to_task(item)
            if task is None:
                logger.warning("Skipping malformed stored task at index %d.", i)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate stored task id=%s.", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d tasks (%d stored entries).", len(tasks), len(data))
        return tasks

    def save(self) -> None:
        self._write(self._tasks)

    def _write(self, tasks: list[Task]) -> None:
        payload = json.dumps([self._task_to_record(t) for t in tasks], ensure_ascii=False)
        self._storage.set_item(self._key, payload)

    def _commit(self, tasks: list[Task]) -> None:
        """Persist `tasks`, then adopt them. A failed write leaves the collection untouched."""
        self._write(tasks)
        self._tasks = tasks

    # ---- mutations ----

    def add(self, text: str) -> Task | None:
        """Create a pending task. Blank text is ignored (returns None)."""
        clean = (text or "").strip()
        if not clean:
            return None

        task = Task(id=self._new_id(), text=clean, created_at=self._clock())
        self._commit([*self._tasks, task])
        logger.debug("Task added id=%s", task.id)
        return task

    def delete(self, task_id: str) -> None:
        before = len(self._tasks)
        self._commit([t for t in self._tasks if t.id != task_id])
        logger.debug("Task delete id=%s removed=%d", task_id, before - len(self._tasks))

    def toggle_completed(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            return None
        previous = (task.completed, task.completed_at)
        task.toggle_completed(self._clock())
        try:
            self.save()
        except Exception:
            task.completed, task.completed_at = previous
            raise
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._commit([t for t in self._tasks if not t.completed])
        removed = before - len(self._tasks)
        logger.debug("Cleared %d completed tasks.", removed)
        return removed

    # ---- queries ----

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def query(self, task_filter: TaskFilter | str = TaskFilter.ALL) -> tuple[Task, ...]:
        """
        Return a new tuple of tasks.

        - all: newest first (by created_at)
        - completed / pending: storage order
        """
        f = TaskFilter.parse(task_filter)
        if f is TaskFilter.COMPLETED:
            return tuple(t for t in self._tasks if t.completed)
        if f is TaskFilter.PENDING:
            return tuple(t for t in self._tasks if not t.completed)
        return tuple(sorted(self._tasks, key=lambda t: t.created_at, reverse=True))

    def fastest_completed(self) -> Task | None:
        fastest: Task | None = None
        best = None
        for task in self._tasks:
            duration = task.completion_duration()
            if duration is None:
                continue
            if best is None or duration < best:
                fastest, best = task, duration
        return fastest

    def stats(self) -> TaskStats:
        return TaskStats(
            total=len(self._tasks),
            completed=sum(1 for t in self._tasks if t.completed),
        )
