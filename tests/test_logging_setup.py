# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from taskpad.logging_setup import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_console_and_file_split(tmp_path, root_logger: logging.Logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)
    setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)

    assert log_file == tmp_path / "logs" / "taskpad.log"
    assert len(root_logger.handlers) == 2
    console, file_handler = root_logger.handlers
    assert console.level == logging.INFO
    assert file_handler.level == logging.DEBUG

    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert console.filter(record("taskpad.tasks.task_store", logging.INFO))
    assert not console.filter(record("urllib3", logging.WARNING))
    assert not console.filter(record("py.warnings", logging.WARNING))
    assert console.filter(record("urllib3", logging.ERROR))

    logging.getLogger("taskpad.test").debug("only in the file")
    file_handler.flush()
    assert "only in the file" in log_file.read_text(encoding="utf-8")
