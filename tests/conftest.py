# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from alfred.core.state import AppState
from alfred.tasks.task_store import TaskList

from .fakes import MemoryTaskStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We use a SimpleNamespace rather than the real config so tests never
    depend on the developer's environment or .env file.
    """
    data_dir = tmp_path / "alfred"
    return SimpleNamespace(
        app_name="alfred",
        log_level="WARNING",
        log_to_file=False,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.txt",
        strict_load=False,
    )


@pytest.fixture()
def storage() -> MemoryTaskStorage:
    return MemoryTaskStorage()


@pytest.fixture()
def task_list(storage: MemoryTaskStorage) -> TaskList:
    return TaskList(storage)


@pytest.fixture()
def state(settings: SimpleNamespace, task_list: TaskList) -> AppState:
    """AppState over an in-memory storage (no disk writes)."""
    return AppState(settings=settings, task_list=task_list)
