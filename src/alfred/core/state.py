# src/alfred/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskList


@dataclass
class AppState:
    # Settings are kept on the state so connectors can read app_name etc.
    settings: object
    task_list: TaskList
