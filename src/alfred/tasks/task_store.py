# src/alfred/tasks/task_store.py

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..core.ports import TaskStorage
from ..errors import AlfredError, DuplicationError, IndexOutOfRangeError
from .task_codec import decode, encode
from .task_models import Task, compile_search_pattern

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "Your list is empty, sir."


class FileTaskStorage:
    """
    Plain-text task file, one record per line.

    Writes go to a sibling .tmp file first and are moved into place with os.replace.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[bytes]:
        """
        Raw records, split on "\n" only and left undecoded so one bad byte
        spoils a single record rather than the whole file.
        """
        if not self._path.exists():
            logger.info("No task file at %s, starting with an empty list.", self._path)
            return []
        lines = self._path.read_bytes().split(b"\n")
        if lines and not lines[-1]:
            lines.pop()
        return lines

    def save(self, lines: list[str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        body = "".join(f"{line}\n" for line in lines)
        tmp.write_text(body, "utf-8")
        os.replace(tmp, self._path)
        logger.debug("Saved %d task records to %s", len(lines), self._path)


class TaskSearch:
    """
    Lazy view over the tasks whose description matches a pattern.

    Iterating twice walks the same snapshot again; the list itself is never touched.
    numbered() keeps each match's 1-based position in the list.
    """

    def __init__(self, tasks: Iterable[Task], pattern: str) -> None:
        self._tasks = tuple(enumerate(tasks, start=1))
        self.pattern = pattern
        self._regex: re.Pattern[str] | None = compile_search_pattern(pattern) if pattern else None

    def __iter__(self) -> Iterator[Task]:
        for _, task in self.numbered():
            yield task

    def numbered(self) -> Iterator[tuple[int, Task]]:
        for index, task in self._tasks:
            if self._regex is None or task.matches(self._regex):
                yield index, task


class TaskList:
    """
    Ordered in-memory task list for one session.

    - insertion order is preserved, user-facing indices are 1-based
    - no two tasks are meaningfully identical (Task.__eq__ ignores completion)
    - every mutation writes a full snapshot through the storage port; a failed
      write is logged and exposed via `persist_error` but never rolls back memory
    """

    def __init__(self, storage: TaskStorage | None = None, tasks: Iterable[Task] = ()) -> None:
        self._storage = storage
        self._tasks: list[Task] = []
        self.persist_error: str | None = None
        for task in tasks:
            if task in self._tasks:
                raise DuplicationError()
            self._tasks.append(task)

    @classmethod
    def load(cls, storage: TaskStorage, *, strict: bool = False) -> TaskList:
        """
        Build a list from the records in `storage`.

        Corrupt records are skipped with a warning, or re-raised when `strict` is set.
        Blank lines are ignored and duplicate records keep their first occurrence.
        """
        tasks: list[Task] = []
        skipped = 0
        for lineno, line in enumerate(storage.load(), start=1):
            if not line.strip():
                continue
            try:
                task = decode(line)
            except AlfredError as e:
                if strict:
                    raise
                skipped += 1
                logger.warning("Skipping corrupt task record line=%d: %s", lineno, e)
                continue
            if task in tasks:
                skipped += 1
                logger.warning("Skipping duplicate task record line=%d: %s", lineno, task.description)
                continue
            tasks.append(task)

        logger.info("TaskList loaded total=%d skipped=%d", len(tasks), skipped)
        return cls(storage, tasks)

    # ---- read access ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    @property
    def size(self) -> int:
        return len(self._tasks)

    def get(self, index: int) -> Task:
        return self._tasks[self._position(index)]

    def _position(self, index: int) -> int:
        if not 1 <= index <= len(self._tasks):
            if self._tasks:
                raise IndexOutOfRangeError(
                    f"There is no task number {index}, sir. "
                    f"Please pick a number from 1 to {len(self._tasks)}."
                )
            raise IndexOutOfRangeError(f"There is no task number {index}, sir. Your list is empty.")
        return index - 1

    # ---- mutations ----

    def add(self, task: Task) -> Task:
        if task in self._tasks:
            raise DuplicationError()
        self._tasks.append(task)
        logger.debug("Task added kind=%s description=%s", task.kind.name, task.description)
        self.persist()
        return task

    def mark_done(self, index: int) -> Task:
        return self._set_completion(index, True)

    def mark_undone(self, index: int) -> Task:
        return self._set_completion(index, False)

    def _set_completion(self, index: int, completed: bool) -> Task:
        pos = self._position(index)
        task = self._tasks[pos].with_completion(completed)
        self._tasks[pos] = task
        logger.debug("Task %d completed=%s", index, completed)
        self.persist()
        return task

    def delete(self, index: int) -> Task:
        pos = self._position(index)
        task = self._tasks.pop(pos)
        logger.debug("Task %d deleted description=%s", index, task.description)
        self.persist()
        return task

    # ---- queries ----

    def search(self, pattern: str) -> TaskSearch:
        return TaskSearch(self._tasks, pattern)

    def summarize(self) -> str:
        if not self._tasks:
            return EMPTY_LIST_MESSAGE
        return render_numbered(
            "Here are the tasks in your list:", enumerate(self._tasks, start=1)
        )

    # ---- persistence ----

    def persist(self) -> bool:
        """
        Write the full snapshot. Returns False (and sets persist_error) on failure.
        """
        if self._storage is None:
            self.persist_error = None
            return True
        try:
            self._storage.save([encode(t) for t in self._tasks])
        except OSError as e:
            logger.exception("Failed to persist %d tasks.", len(self._tasks))
            self.persist_error = str(e) or e.__class__.__name__
            return False
        self.persist_error = None
        return True


def render_numbered(header: str, numbered: Iterable[tuple[int, Task]]) -> str:
    lines = [header]
    for i, task in numbered:
        lines.append(f"{i}.{task.render()}")
    return "\n".join(lines)
