"""Tagged failure conditions raised by the engine."""

from __future__ import annotations


class InvalidOperationError(ValueError):
    """A mutation was refused before touching the project."""


class ImportFailedError(Exception):
    """A KML import produced nothing to commit.

    ``reason`` is ``"parse"`` for an unreadable document and ``"empty"`` when no
    polygon or line geometry survived.
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


class NotFoundError(InvalidOperationError):
    """The layer or shape id does not exist in the project."""
