"""
Text renderings of todos.
"""

from __future__ import annotations

from typing import List, Sequence

from .scan import FileReport
from .todos import Todo, make_position, parse_position

__all__ = ["format_todo", "format_markdown", "make_position", "parse_position"]


def format_todo(todo: Todo) -> str:
    """``* TODO`` header joined to the block lines, then the position line."""
    return str(todo)


def format_markdown(reports: Sequence[FileReport]) -> str:
    lines: List[str] = []
    lines.append("# TODO Inventory")
    lines.append("")
    total = sum(len(report.todos) for report in reports)
    lines.append(f"Collected {total} todo(s) from {len(reports)} file(s).")
    lines.append("")
    for report in reports:
        if not report.todos:
            continue
        lines.append(f"## `{report.path.as_posix()}`")
        for todo in report.todos:
            _, line = parse_position(todo.position)
            text = " ".join(part.strip() for part in todo.lines if part.strip())
            lines.append(f"- L{line}: {text}")
        lines.append("")
    return "\n".join(lines)
