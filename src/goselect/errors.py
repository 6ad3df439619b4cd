"""Error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1


@dataclass
class GoSelectError(Exception):
    message: str
    code: ExitCode = ExitCode.FAILURE
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class ScanError(GoSelectError):
    """The installation root could not be opened or listed."""


class EmptyCatalogError(GoSelectError):
    """The scan succeeded but found no installations."""


class PersistError(GoSelectError):
    """Writing the selection file failed."""


class DriverError(GoSelectError):
    """The terminal driver could not run the interactive session."""


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
