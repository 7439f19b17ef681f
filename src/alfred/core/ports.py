# src/alfred/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list depends on a Protocol instead of a concrete file store.
This keeps the storage backend swappable and makes testing easier.
"""

from typing import Protocol


class TaskStorage(Protocol):
    """
    Line-oriented durable store: one encoded task record per line.

    load() may return raw bytes per record; the codec decodes them as UTF-8.
    save() always receives the full snapshot and should replace the previous one atomically.
    """

    def load(self) -> list[str] | list[bytes]: ...

    def save(self, lines: list[str]) -> None: ...
