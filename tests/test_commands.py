# tests/test_commands.py

from __future__ import annotations

from datetime import datetime

import pytest

from alfred.cli.commands import (
    ByeCommand,
    CommandRegistry,
    DeadlineCommand,
    EventCommand,
    FindCommand,
    ListCommand,
    MarkCommand,
    TodoCommand,
    UnknownCommand,
    registry,
)
from alfred.errors import (
    DuplicationError,
    IndexOutOfRangeError,
    InvalidDateTimeError,
    InvalidInputError,
    MissingInputError,
)
from alfred.tasks.task_codec import decode
from alfred.tasks.task_models import Task, TaskKind
from alfred.tasks.task_store import TaskList

from .fakes import FailingTaskStorage, MemoryTaskStorage


def run(task_list: TaskList, line: str) -> str:
    return registry.parse(line).execute(task_list)


def test_dispatch_picks_variant_from_first_token() -> None:
    assert isinstance(registry.parse("todo read book"), TodoCommand)
    assert isinstance(registry.parse("deadline x /by 2024-01-01T10:00"), DeadlineCommand)
    assert isinstance(registry.parse("event x /at 2024-01-01T10:00"), EventCommand)
    assert isinstance(registry.parse("mark 1"), MarkCommand)
    assert isinstance(registry.parse("find book"), FindCommand)
    assert isinstance(registry.parse("list"), ListCommand)
    assert isinstance(registry.parse("bye"), ByeCommand)


def test_dispatch_is_case_sensitive_and_falls_back_to_unknown() -> None:
    assert isinstance(registry.parse("TODO read"), UnknownCommand)
    assert isinstance(registry.parse("todoread"), UnknownCommand)
    assert isinstance(registry.parse(""), UnknownCommand)


def test_only_bye_exits() -> None:
    assert registry.parse("bye").is_exit() is True
    for line in ("todo a", "list", "find a", "mark 1", "unmark 1", "delete 1", "nope"):
        assert registry.parse(line).is_exit() is False


def test_unknown_command_never_mutates(task_list: TaskList, storage: MemoryTaskStorage) -> None:
    with pytest.raises(MissingInputError) as exc:
        run(task_list, "dance now")
    assert "dance" in str(exc.value)
    with pytest.raises(MissingInputError):
        run(task_list, "   ")
    assert task_list.size == 0
    assert storage.saves == []


def test_scenario_a_todo(task_list: TaskList) -> None:
    out = run(task_list, "todo read book")

    assert task_list.size == 1
    task = task_list.get(1)
    assert task.kind is TaskKind.TODO
    assert task.description == "read book"
    assert task.completed is False
    assert out.startswith("Yes sir, I've added this task.")
    assert "1. ❌  read book" in out


def test_scenario_b_deadline_then_mark(task_list: TaskList, storage: MemoryTaskStorage) -> None:
    run(task_list, "deadline submit report /by 2024-12-01T23:59")
    out = run(task_list, "mark 1")

    assert "✔  submit report" in out
    assert task_list.get(1).render().startswith(" ✔")

    restored = decode(storage.lines[0])
    assert restored.kind is TaskKind.DEADLINE
    assert restored.description == "submit report"
    assert restored.when == datetime(2024, 12, 1, 23, 59)
    assert restored.completed is True


def test_scenario_c_bad_date(task_list: TaskList) -> None:
    with pytest.raises(InvalidDateTimeError):
        run(task_list, "deadline x /by not-a-date")
    assert task_list.size == 0


def test_scenario_d_duplicate_event(task_list: TaskList) -> None:
    run(task_list, "event meeting /at 2024-01-01T10:00")
    with pytest.raises(DuplicationError):
        run(task_list, "event meeting /at 2024-01-01T10:00")
    assert task_list.size == 1


def test_scenario_e_find(task_list: TaskList) -> None:
    run(task_list, "todo read book")

    out = run(task_list, "find book")
    assert "Here are the matching tasks" in out
    assert "read book" in out

    assert run(task_list, "find xyz") == "No matching tasks found, sir."
    assert task_list.size == 1


@pytest.mark.parametrize(
    "line",
    [
        "deadline submit report",
        "deadline /by 2024-12-01T23:59",
        "deadline a /by 2024-12-01T23:59 /by 2024-12-02T23:59",
        "event meeting",
        "event meeting /by 2024-01-01T10:00",
    ],
)
def test_add_arity_errors(task_list: TaskList, line: str) -> None:
    with pytest.raises(InvalidInputError):
        run(task_list, line)
    assert task_list.size == 0


def test_todo_without_description(task_list: TaskList) -> None:
    with pytest.raises(MissingInputError):
        run(task_list, "todo")
    with pytest.raises(MissingInputError):
        run(task_list, "todo    ")
    assert task_list.size == 0


def test_separator_in_description_is_rejected(task_list: TaskList) -> None:
    with pytest.raises(InvalidInputError):
        run(task_list, "todo press the ` key")
    assert task_list.size == 0


@pytest.mark.parametrize("keyword", ["mark", "unmark", "delete"])
def test_index_commands_validate_argument(task_list: TaskList, keyword: str) -> None:
    run(task_list, "todo read book")

    with pytest.raises(MissingInputError):
        run(task_list, keyword)
    with pytest.raises(InvalidInputError):
        run(task_list, f"{keyword} first")
    with pytest.raises(IndexOutOfRangeError):
        run(task_list, f"{keyword} 0")
    with pytest.raises(IndexOutOfRangeError):
        run(task_list, f"{keyword} 2")

    assert task_list.size == 1
    assert task_list.get(1).completed is False


def test_unmark_and_delete(task_list: TaskList) -> None:
    run(task_list, "todo a")
    run(task_list, "todo b")
    run(task_list, "mark 2")

    out = run(task_list, "unmark 2")
    assert "not done yet" in out
    assert task_list.get(2).completed is False

    out = run(task_list, "delete 1")
    assert "removed this task" in out
    assert "Now you have 1 task in the list." in out
    assert [t.description for t in task_list] == ["b"]


def test_list(task_list: TaskList) -> None:
    assert run(task_list, "list") == "Your list is empty, sir."
    task_list.add(Task.todo("read book"))
    assert run(task_list, "list") == "Here are the tasks in your list:\n1. ❌  read book"


def test_persist_failure_is_reported_in_response() -> None:
    task_list = TaskList(FailingTaskStorage())
    out = run(task_list, "todo read book")
    assert task_list.size == 1
    assert "could not save your tasks" in out


def test_registry_custom_keyword(task_list: TaskList) -> None:
    reg = CommandRegistry()
    reg.register("add", TodoCommand.from_text, help_text="add <description>")

    reg.parse("add read book").execute(task_list)

    assert task_list.get(1) == Task.todo("read book")
    assert isinstance(reg.parse("todo read book"), UnknownCommand)
    assert "add - add <description>" in reg.build_help()


def test_find_shows_list_positions_usable_by_mark(task_list: TaskList) -> None:
    run(task_list, "todo buy milk")
    run(task_list, "todo read book")

    out = run(task_list, "find book")
    assert "2. ❌  read book" in out
    assert "1." not in out

    run(task_list, "mark 2")
    assert task_list.get(2).completed is True
    assert task_list.get(1).completed is False
