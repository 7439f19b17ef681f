# src/alfred/errors.py

"""
Recoverable errors raised by the task core.

Every error carries a user-facing message; the connector prints str(err)
and keeps the session running.
"""

from __future__ import annotations


class AlfredError(Exception):
    default_message = "Something went wrong, sir."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AlfredError):
    default_message = "Invalid input, sir. Please check the arguments for that command."


class InvalidDateTimeError(AlfredError):
    default_message = (
        "Invalid date-time, sir. Please use the ISO format, e.g. 2024-12-01T23:59."
    )


class MissingInputError(AlfredError):
    default_message = (
        "Missing input, sir. No valid input found after keyword arguments "
        "'(un)mark', 'delete', 'todo', 'event' or 'deadline'."
    )


class DuplicationError(AlfredError):
    default_message = "That task is already in your list, sir."


class IndexOutOfRangeError(AlfredError):
    default_message = "There is no task with that number, sir."


class MalformedRecordError(AlfredError):
    default_message = "A saved task record is corrupted, sir."
