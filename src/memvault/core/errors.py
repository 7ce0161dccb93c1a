"""Error kinds and command outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    MISSING_ARGUMENT = "missing_argument"
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    NOT_MATCHED = "not_matched"
    CONFLICT = "conflict"
    IO_FAILURE = "io_failure"


class MemoryToolError(Exception):
    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingArgumentError(MemoryToolError):
    kind = ErrorKind.MISSING_ARGUMENT


class ValidationError(MemoryToolError):
    kind = ErrorKind.VALIDATION


class NotFoundError(MemoryToolError):
    kind = ErrorKind.NOT_FOUND


class NotMatchedError(MemoryToolError):
    kind = ErrorKind.NOT_MATCHED


class ConflictError(MemoryToolError):
    kind = ErrorKind.CONFLICT


@dataclass(frozen=True)
class Ok:
    message: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


Outcome = Ok | Err
