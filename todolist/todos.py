"""
Group comment lines into todo blocks.

A block starts at the comment line holding the marker token and absorbs the
comment lines directly below it. It ends at the first blank comment line, at
the first skipped line number (code in between) or at the next marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .comments import CommentLine


def make_position(path: Union[str, Path], line: int) -> str:
    return f"{path}:{line}"


def parse_position(position: str) -> Tuple[str, int]:
    """Split a ``<path>:<line>`` reference back into its path and line number."""
    path, sep, line = position.rpartition(":")
    if not sep or not path or not line.isdigit() or int(line) < 1:
        raise ValueError(f"not a file:line position: {position!r}")
    return path, int(line)


@dataclass
class Todo:
    lines: List[str] = field(default_factory=list)
    position: str = ""

    def append_line(self, line: str) -> None:
        self.lines.append(line)

    def is_empty(self) -> bool:
        return not any(line.strip() for line in self.lines)

    def __str__(self) -> str:
        return "* TODO " + "\n".join(self.lines) + "\n" + self.position


def find_todos(path: Union[str, Path], comments: Iterable[CommentLine], token: str) -> List[Todo]:
    """
    Build one Todo per occurrence of ``token`` in ``comments``.

    The first stored line is the text after the token; the position is
    ``<path>:<line>`` of the marker line. Empty blocks are kept.
    """
    result: List[Todo] = []
    todo_open = False
    next_line = 0
    for comment in comments:
        idx = comment.data.find(token) if token else -1
        if idx > -1:
            result.append(Todo(
                    [comment.data[idx + len(token):]],
                    make_position(path, comment.line)))
            todo_open = True
            next_line = comment.line + 1
        elif todo_open and comment.line == next_line and comment.data:
            result[-1].append_line(comment.data)
            next_line = comment.line + 1
        else:
            todo_open = False
    return result
