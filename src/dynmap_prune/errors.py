"""Exceptions raised while pruning a marker document.

Everything derives from PruneError so the command line can report any fatal
input problem with one handler; the extra builtin bases keep the errors
catchable the usual way by library callers.
"""
from __future__ import annotations


class PruneError(Exception):
    """Base class for fatal pruning errors."""

    exit_code = 2


class MissingFileError(PruneError):
    """A required input file does not exist."""

    exit_code = 1

    def __init__(self, path, what: str = "input file"):
        self.path = str(path)
        self.what = what
        super().__init__(f"Missing {what}: {self.path}")


class SelectionFormatError(PruneError):
    """A selection line does not have 2 or 4 fields."""


class SelectionParseError(PruneError, ValueError):
    """A selection field is not a base-10 integer."""


class CoordinateError(PruneError, ValueError):
    """A marker has a missing or unparsable x/z attribute."""

    def __init__(self, key: str, attribute: str, value=None):
        self.key = key
        self.attribute = attribute
        self.value = value
        if value is None:
            msg = f"Marker {key!r} has no '{attribute}' coordinate"
        else:
            msg = f"Marker {key!r} has an invalid '{attribute}' coordinate: {value!r}"
        super().__init__(msg)


class MarkerDocumentError(PruneError):
    """The marker document is not shaped like a marker database."""


__all__ = [
    "PruneError",
    "MissingFileError",
    "SelectionFormatError",
    "SelectionParseError",
    "CoordinateError",
    "MarkerDocumentError",
]
