"""
End-to-end scan: projects -> files -> comment lines -> todos.

Failures are non-fatal. An unreadable file yields an empty report, an
unreadable directory is skipped, and both are logged. Malformed globs in the
configuration still raise PatternSyntaxError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from .comments import CommentDelimiters, delimiters_for, find_comments
from .config import ScanConfig
from .discovery import find_files, find_projects
from .errors import DiscoveryError, FileAccessError
from .todos import Todo, find_todos

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    project: Path
    path: Path
    todos: List[Todo] = field(default_factory=list)
    error: Optional[FileAccessError] = None


def _report_discovery_error(exc: DiscoveryError) -> None:
    logger.error("%s", exc)


def resolve_start(config: ScanConfig, directory: Optional[Path] = None) -> Path:
    """Absolute start directory: ``directory`` if given, else the configured root."""
    if directory is None:
        return config.root
    directory = Path(directory)
    if directory.is_absolute():
        return directory
    return config.root / directory


def scan_file(
        path: Path,
        token: str,
        cs: Optional[CommentDelimiters] = None,
) -> List[Todo]:
    """Todos of a single file. Raises FileAccessError if it cannot be read."""
    if cs is None:
        cs = delimiters_for(path)
        if cs is None:
            logger.debug("%s: unknown comment format, skipped", path)
            return []
    comments = find_comments(path, cs)
    todos = find_todos(path, comments, token)
    logger.debug("%s: %d todo(s)", path, len(todos))
    return todos


def scan_tree(config: ScanConfig, directory: Optional[Path] = None) -> Iterator[FileReport]:
    """
    Yield one FileReport per matching source file of every project found
    under ``directory``, one file fully processed before the next.
    """
    start = resolve_start(config, directory)
    projects = find_projects(start, config.markers, on_error=_report_discovery_error)
    logger.info("found %d project(s) under %s", len(projects), start)

    for project in projects:
        files = find_files(project, config.file_patterns, on_error=_report_discovery_error)
        logger.debug("%s: %d file(s)", project, len(files))
        for path in files:
            try:
                todos = scan_file(path, config.token)
            except FileAccessError as exc:
                logger.warning("%s", exc)
                yield FileReport(project, path, [], exc)
                continue
            yield FileReport(project, path, todos)
