# src/alfred/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the file storage and the loaded task list into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import FileTaskStorage, TaskList

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    A corrupt task file only aborts start-up when settings.strict_load is set.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = FileTaskStorage(settings.tasks_path)
    task_list = TaskList.load(storage, strict=bool(getattr(settings, "strict_load", False)))
    logger.info("Task list ready path=%s total=%d", storage.path, task_list.size)

    return AppState(settings=settings, task_list=task_list)
