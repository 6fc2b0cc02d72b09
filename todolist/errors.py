"""
Exceptions raised by todolist.

Only file/directory access and glob compilation can fail; comment extraction
and todo aggregation work on in-memory data and raise nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class TodoListError(Exception):
    """Base class for all todolist errors."""


class PatternSyntaxError(TodoListError, ValueError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid glob pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class FileAccessError(TodoListError):
    """A source file could not be opened or read."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class DiscoveryError(TodoListError):
    """A directory could not be listed while searching for projects or files."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"cannot list {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
