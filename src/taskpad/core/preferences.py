# src/taskpad/core/preferences.py

from __future__ import annotations

import logging

from .ports import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_THEME_KEY = "darkMode"


class Preferences:
    """Display preferences persisted independently of task data (dark/light theme)."""

    def __init__(self, storage: KeyValueStorage, *, theme_key: str = DEFAULT_THEME_KEY) -> None:
        self._storage = storage
        self._theme_key = theme_key
        self.dark_mode: bool = self._load_dark_mode()

    def _load_dark_mode(self) -> bool:
        raw = self._storage.get_item(self._theme_key)
        return (raw or "").strip().lower() == "true"

    def set_dark_mode(self, enabled: bool) -> None:
        self.dark_mode = bool(enabled)
        self._storage.set_item(self._theme_key, "true" if self.dark_mode else "false")
        logger.debug("Theme set dark_mode=%s", self.dark_mode)

    def toggle_dark_mode(self) -> bool:
        self.set_dark_mode(not self.dark_mode)
        return self.dark_mode
