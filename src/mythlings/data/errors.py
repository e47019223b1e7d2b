"""Exceptions raised while loading catalog content."""
from __future__ import annotations


class DataError(Exception):
    """Base exception for the data layer.

    `source` names the definition file (or file/entry pair) the failure came from.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class DataLoadError(DataError):
    """A definition file is missing, unreadable or not valid JSON."""


class DataValidationError(DataError):
    """A definition entry has the wrong shape or an out-of-range value."""


class DataReferenceError(DataError):
    """A definition points at an ability or mythling id that does not exist."""
