# src/alfred/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum

from ..errors import InvalidDateTimeError, InvalidInputError, MissingInputError

# Reserved field separator of the persisted record format.
SEPARATOR = "`"

COMPLETION_GLYPH = "✔"
INCOMPLETE_GLYPH = "❌"

DISPLAY_FORMAT = "%d %b %Y, %H:%M"


class TaskKind(StrEnum):
    """
    Task variant. The value doubles as the record tag.
    """

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @property
    def time_label(self) -> str | None:
        if self is TaskKind.DEADLINE:
            return "by"
        if self is TaskKind.EVENT:
            return "at"
        return None

    @property
    def has_time(self) -> bool:
        return self is not TaskKind.TODO


def parse_datetime(raw: str) -> datetime:
    """
    Parse a local ISO-8601 date-time (e.g. 2024-12-01T23:59).

    Values carrying a UTC offset are rejected: tasks only know local time.
    """
    text = (raw or "").strip()
    if not text:
        raise InvalidDateTimeError()
    try:
        value = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidDateTimeError() from e
    if value.tzinfo is not None:
        raise InvalidDateTimeError("Local date-times only, sir. Please drop the UTC offset.")
    return value


def format_datetime(value: datetime) -> str:
    return value.strftime(DISPLAY_FORMAT)


def compile_search_pattern(pattern: str) -> re.Pattern[str]:
    """
    Case-insensitive regex for description search.
    Invalid regex syntax falls back to a literal substring match.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(pattern), re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Task:
    """
    One tracked item: a to-do, a deadline (`when` = due) or an event (`when` = start).

    Equality ignores `completed`, so `a == b` means "meaningfully identical"
    (same kind, same description, same timestamp).
    """

    kind: TaskKind
    description: str
    when: datetime | None = None
    completed: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        description = (self.description or "").strip()
        if not description:
            raise MissingInputError()
        if SEPARATOR in description or "\n" in description or "\r" in description:
            raise InvalidInputError(
                f"Descriptions may not contain the {SEPARATOR!r} character or line breaks, sir."
            )
        object.__setattr__(self, "description", description)

        if self.kind.has_time and self.when is None:
            raise ValueError(f"{self.kind.name} task requires a timestamp")
        if not self.kind.has_time and self.when is not None:
            raise ValueError("TODO task takes no timestamp")
        if self.when is not None and self.when.tzinfo is not None:
            raise InvalidDateTimeError("Local date-times only, sir. Please drop the UTC offset.")

    # ---- constructors ----

    @classmethod
    def todo(cls, description: str) -> Task:
        return cls(TaskKind.TODO, description)

    @classmethod
    def deadline(cls, description: str, by: datetime) -> Task:
        return cls(TaskKind.DEADLINE, description, by)

    @classmethod
    def event(cls, description: str, at: datetime) -> Task:
        return cls(TaskKind.EVENT, description, at)

    # ---- completion ----

    def with_completion(self, completed: bool) -> Task:
        if self.completed == completed:
            return self
        return replace(self, completed=completed)

    def mark_complete(self) -> Task:
        return self.with_completion(True)

    def mark_incomplete(self) -> Task:
        return self.with_completion(False)

    # ---- queries ----

    def matches(self, pattern: str | re.Pattern[str]) -> bool:
        if isinstance(pattern, str):
            pattern = compile_search_pattern(pattern)
        return pattern.search(self.description) is not None

    def render(self) -> str:
        glyph = COMPLETION_GLYPH if self.completed else INCOMPLETE_GLYPH
        out = f" {glyph}  {self.description}"
        if self.when is not None:
            out += f" ({self.kind.time_label}: {format_datetime(self.when)})"
        return out

    def __str__(self) -> str:
        return self.render()
