# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable (SQLite on disk, in-memory in tests) and makes
time and id generation controllable from tests.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Protocol

Clock = Callable[[], datetime]
# Returns a timezone-aware "now".

IdFactory = Callable[[], str]


class KeyValueStorage(Protocol):
    """
    Local key/value storage with string values (localStorage-like).

    Values are opaque strings; callers own the encoding (JSON for tasks,
    "true"/"false" for the theme flag).
    """

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> Iterable[str]: ...
