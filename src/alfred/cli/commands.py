# src/alfred/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, Protocol

from ..errors import InvalidInputError, MissingInputError
from ..tasks.task_models import Task, parse_datetime
from ..tasks.task_store import TaskList, render_numbered

logger = logging.getLogger(__name__)


class Command(Protocol):
    """A parsed request. execute() validates fully before touching the list."""

    def execute(self, tasks: TaskList) -> str: ...

    def is_exit(self) -> bool: ...


CommandFactory = Callable[[str], Command]


def _split_arguments(remainder: str, token: str) -> tuple[str, ...]:
    parts = (p.strip() for p in remainder.strip().split(token))
    return tuple(p for p in parts if p)


def _parse_index(raw: str) -> int:
    raw = raw.strip()
    if not raw:
        raise MissingInputError()
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidInputError(f"'{raw}' is not a task number, sir.") from e


def _with_persist_warning(tasks: TaskList, out: str) -> str:
    if tasks.persist_error:
        out += f"\n(Warning, sir: I could not save your tasks: {tasks.persist_error})"
    return out


def _added_response(tasks: TaskList, task: Task) -> str:
    out = "Yes sir, I've added this task.\n"
    out += task.render() + "\n"
    out += tasks.summarize()
    return _with_persist_warning(tasks, out)


# ---- add-type commands ----


@dataclass(frozen=True, slots=True)
class TodoCommand:
    keyword: ClassVar[str] = "todo"
    description: str

    @classmethod
    def from_text(cls, remainder: str) -> TodoCommand:
        return cls(remainder.strip())

    def execute(self, tasks: TaskList) -> str:
        if not self.description:
            raise MissingInputError()
        return _added_response(tasks, tasks.add(Task.todo(self.description)))

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class DeadlineCommand:
    keyword: ClassVar[str] = "deadline"
    separator: ClassVar[str] = " /by "
    arguments: tuple[str, ...]

    @classmethod
    def from_text(cls, remainder: str) -> DeadlineCommand:
        return cls(_split_arguments(remainder, cls.separator))

    def execute(self, tasks: TaskList) -> str:
        if len(self.arguments) != 2:
            raise InvalidInputError(
                "Invalid input, sir. Usage: deadline <description> /by <date-time>."
            )
        description, raw_by = self.arguments
        task = Task.deadline(description, parse_datetime(raw_by))
        return _added_response(tasks, tasks.add(task))

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class EventCommand:
    keyword: ClassVar[str] = "event"
    separator: ClassVar[str] = " /at "
    arguments: tuple[str, ...]

    @classmethod
    def from_text(cls, remainder: str) -> EventCommand:
        return cls(_split_arguments(remainder, cls.separator))

    def execute(self, tasks: TaskList) -> str:
        if len(self.arguments) != 2:
            raise InvalidInputError("Invalid input, sir. Usage: event <description> /at <date-time>.")
        description, raw_at = self.arguments
        task = Task.event(description, parse_datetime(raw_at))
        return _added_response(tasks, tasks.add(task))

    def is_exit(self) -> bool:
        return False


# ---- index commands ----


@dataclass(frozen=True, slots=True)
class MarkCommand:
    keyword: ClassVar[str] = "mark"
    raw_index: str

    @classmethod
    def from_text(cls, remainder: str) -> MarkCommand:
        return cls(remainder.strip())

    def execute(self, tasks: TaskList) -> str:
        task = tasks.mark_done(_parse_index(self.raw_index))
        out = "Very well sir, I've marked this task as done:\n" + task.render()
        return _with_persist_warning(tasks, out)

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class UnmarkCommand:
    keyword: ClassVar[str] = "unmark"
    raw_index: str

    @classmethod
    def from_text(cls, remainder: str) -> UnmarkCommand:
        return cls(remainder.strip())

    def execute(self, tasks: TaskList) -> str:
        task = tasks.mark_undone(_parse_index(self.raw_index))
        out = "Very well sir, I've marked this task as not done yet:\n" + task.render()
        return _with_persist_warning(tasks, out)

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class DeleteCommand:
    keyword: ClassVar[str] = "delete"
    raw_index: str

    @classmethod
    def from_text(cls, remainder: str) -> DeleteCommand:
        return cls(remainder.strip())

    def execute(self, tasks: TaskList) -> str:
        task = tasks.delete(_parse_index(self.raw_index))
        out = "Noted sir, I've removed this task:\n" + task.render() + "\n"
        out += f"Now you have {tasks.size} task{'' if tasks.size == 1 else 's'} in the list."
        return _with_persist_warning(tasks, out)

    def is_exit(self) -> bool:
        return False


# ---- queries / control ----


@dataclass(frozen=True, slots=True)
class FindCommand:
    keyword: ClassVar[str] = "find"
    pattern: str

    @classmethod
    def from_text(cls, remainder: str) -> FindCommand:
        return cls(remainder.strip())

    def execute(self, tasks: TaskList) -> str:
        matches = list(tasks.search(self.pattern).numbered())
        if not matches:
            return "No matching tasks found, sir."
        return render_numbered("Here are the matching tasks in your list:", matches)

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ListCommand:
    keyword: ClassVar[str] = "list"

    @classmethod
    def from_text(cls, remainder: str) -> ListCommand:
        return cls()

    def execute(self, tasks: TaskList) -> str:
        return tasks.summarize()

    def is_exit(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ByeCommand:
    keyword: ClassVar[str] = "bye"

    @classmethod
    def from_text(cls, remainder: str) -> ByeCommand:
        return cls()

    def execute(self, tasks: TaskList) -> str:
        return "Goodbye, sir. I hope to see you again soon."

    def is_exit(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class UnknownCommand:
    keyword: str
    known: tuple[str, ...] = ()

    def execute(self, tasks: TaskList) -> str:
        if not self.keyword:
            raise MissingInputError()
        msg = f"I'm sorry sir, I don't know what '{self.keyword}' means."
        if self.known:
            msg += f" I understand: {', '.join(self.known)}."
        raise MissingInputError(msg)

    def is_exit(self) -> bool:
        return False


# ---- dispatcher ----


class CommandRegistry:
    """Keyword -> command factory. Keywords match case-sensitively."""

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}
        self._help: dict[str, str] = {}

    def register(self, keyword: str, factory: CommandFactory, help_text: str) -> None:
        self._factories[keyword] = factory
        self._help[keyword] = help_text

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(self._factories)

    def parse(self, line: str) -> Command:
        """
        Select a command from the first whitespace-delimited token of `line`
        and hand the remainder to it. Never raises; unknown keywords yield UnknownCommand.
        """
        parts = line.strip().split(maxsplit=1)
        keyword = parts[0] if parts else ""
        remainder = parts[1] if len(parts) > 1 else ""

        factory = self._factories.get(keyword)
        if factory is None:
            logger.debug("Unknown command keyword=%r", keyword)
            return UnknownCommand(keyword, self.keywords)
        return factory(remainder)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for keyword, help_text in self._help.items():
            lines.append(f"  {keyword} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

registry.register("todo", TodoCommand.from_text, help_text="todo <description>")
registry.register(
    "deadline", DeadlineCommand.from_text, help_text="deadline <description> /by <date-time>"
)
registry.register("event", EventCommand.from_text, help_text="event <description> /at <date-time>")
registry.register("mark", MarkCommand.from_text, help_text="mark <task number>")
registry.register("unmark", UnmarkCommand.from_text, help_text="unmark <task number>")
registry.register("delete", DeleteCommand.from_text, help_text="delete <task number>")
registry.register("find", FindCommand.from_text, help_text="find <pattern>")
registry.register("list", ListCommand.from_text, help_text="list")
registry.register("bye", ByeCommand.from_text, help_text="bye")
