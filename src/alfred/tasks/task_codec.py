# src/alfred/tasks/task_codec.py

"""
Single-line record codec for tasks.

Record layout (fields joined by SEPARATOR):
  <TAG> <MARK> <description> [<timestamp>]

TAG is T/D/E, MARK is X (done) or O (not done), timestamps are ISO-8601.
"""

from __future__ import annotations

from .task_models import SEPARATOR, Task, TaskKind, parse_datetime
from ..errors import MalformedRecordError

DONE_MARK = "X"
NOT_DONE_MARK = "O"

_FIELD_COUNTS: dict[TaskKind, int] = {
    TaskKind.TODO: 3,
    TaskKind.DEADLINE: 4,
    TaskKind.EVENT: 4,
}


def encode(task: Task) -> str:
    fields = [
        task.kind.value,
        DONE_MARK if task.completed else NOT_DONE_MARK,
        task.description,
    ]
    if task.when is not None:
        fields.append(task.when.isoformat())
    return SEPARATOR.join(fields)


def decode(line: str | bytes) -> Task:
    """
    Inverse of encode(). Raw bytes are decoded as UTF-8 first.

    Raises MalformedRecordError for undecodable bytes, an unknown tag, an unknown
    completion mark or a wrong field count, and InvalidDateTimeError for a bad timestamp.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecordError("Saved record is not valid UTF-8 text, sir.") from e

    fields = [f.strip() for f in line.rstrip("\r\n").split(SEPARATOR)]

    try:
        kind = TaskKind(fields[0])
    except ValueError as e:
        raise MalformedRecordError(f"Unknown task type {fields[0]!r} in saved record, sir.") from e

    expected = _FIELD_COUNTS[kind]
    if len(fields) != expected:
        raise MalformedRecordError(
            f"Saved {kind.name.lower()} record has {len(fields)} fields "
            f"instead of {expected}, sir."
        )

    mark = fields[1]
    if mark not in (DONE_MARK, NOT_DONE_MARK):
        raise MalformedRecordError(f"Unknown completion mark {mark!r} in saved record, sir.")

    description = fields[2]
    if not description:
        raise MalformedRecordError("Saved record has an empty description, sir.")

    when = parse_datetime(fields[3]) if kind.has_time else None
    return Task(kind, description, when, completed=(mark == DONE_MARK))
