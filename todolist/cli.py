#!/usr/bin/env python3
"""
todolist: print every ``TODO:`` comment block of the projects under a directory.

    todolist [DIRECTORY]

A project is a directory holding ``.git``, ``go.mod`` or a ``Makefile``.
Each todo is printed as::

    * TODO <first line>
    <following comment lines>
    <absolute file path>:<line>

Diagnostics go to stderr. Set TODOLIST_LOG_LEVEL=DEBUG for per-file details.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import ScanConfig, log_level_from_env
from .errors import TodoListError
from .render import format_todo
from .scan import scan_tree

err_console = Console(stderr=True)
app = typer.Typer(help="List TODO comment blocks across projects.", add_completion=False)

logger = logging.getLogger("todolist")


def setup_logging(level: Optional[int] = None) -> None:
    if level is None:
        level = log_level_from_env()
    logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
    )


@app.command()
def main(
        directory: Optional[Path] = typer.Argument(
                None,
                exists=True,
                file_okay=False,
                dir_okay=True,
                help="Directory to search for projects (default: cwd)."),
) -> None:
    """Find projects under DIRECTORY and print their TODO blocks."""
    setup_logging()
    start = (directory or Path(os.getcwd())).resolve()
    config = ScanConfig()

    count = 0
    try:
        for report in scan_tree(config, start):
            for todo in report.todos:
                typer.echo(format_todo(todo))
                count += 1
    except TodoListError as exc:
        logger.error("%s", exc)
    logger.info("%d todo(s) printed", count)


if __name__ == "__main__":
    app()
