"""Exceptions raised by the tfs_tables library."""

from __future__ import annotations


class TfsError(Exception):
    """Base exception for tfs_tables."""


class TypeMismatchError(TfsError, TypeError):
    """Raised when an accessor or write disagrees with a stored kind."""


class KeyNotFoundError(TfsError, KeyError):
    """Raised when a column, property or row index key is missing."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class DuplicateColumnError(TfsError, ValueError):
    """Raised when a column name is registered twice in one table."""


class InconsistentTableError(TfsError, ValueError):
    """Raised when a table's columns differ in length and cannot be written."""


class MalformedLineError(TfsError, ValueError):
    """Raised for structurally invalid TFS input."""

    def __init__(self, message: str, lineno: int | None = None, line: str | None = None) -> None:
        self.reason = message
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f"{message} at line {lineno}"
        super().__init__(message)
