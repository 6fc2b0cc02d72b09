"""
Locate project roots and their source files.

Both searches skip hidden directories (names starting with ``.``). Returned
paths are joined onto the directory that was searched.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .errors import DiscoveryError
from .patterns import is_match_any

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[DiscoveryError], None]


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def _list_dir(path: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise DiscoveryError(path, exc.strerror or str(exc)) from exc


def find_projects(
        path: Path,
        markers: Sequence[str],
        on_error: Optional[ErrorHandler] = None,
) -> List[Path]:
    """
    Return every directory under ``path`` (``path`` included) that contains an
    entry matching one of the ``markers`` globs.

    A matched directory is a leaf: its subdirectories are not searched. Hidden
    entries may act as markers (``.git``) but hidden directories are never
    descended into.

    Filesystem errors raise DiscoveryError unless ``on_error`` is given, in
    which case the unreadable subtree is reported to it and skipped. Invalid
    marker globs always raise PatternSyntaxError.
    """
    projects: List[Path] = []
    # Depth-first, children pushed in reverse so they pop in name order.
    stack = [Path(path)]
    while stack:
        current = stack.pop()
        try:
            entries = _list_dir(current)
        except DiscoveryError as exc:
            if on_error is None:
                raise
            on_error(exc)
            continue

        marker = next((e.name for e in entries if is_match_any(markers, e.name)), None)
        if marker is not None:
            logger.debug("project %s (marker %s)", current, marker)
            projects.append(current)
            continue

        subdirs = [
            current / entry.name for entry in entries
            if not is_hidden(entry.name) and entry.is_dir(follow_symlinks=False)
        ]
        stack.extend(reversed(subdirs))
    return projects


def find_files(
        path: Path,
        patterns: Sequence[str],
        on_error: Optional[ErrorHandler] = None,
) -> List[Path]:
    """Return files under ``path`` whose name matches one of ``patterns``, in walk order."""
    path = Path(path)
    errors: List[DiscoveryError] = []

    def _onerror(exc: OSError) -> None:
        errors.append(DiscoveryError(exc.filename or path, exc.strerror or str(exc)))

    result: List[Path] = []
    for dp, ds, fs in os.walk(path, onerror=_onerror):
        if errors and on_error is None:
            raise errors[0]
        ds[:] = sorted(d for d in ds if not is_hidden(d))
        for fn in sorted(fs):
            if is_hidden(fn):
                continue
            if is_match_any(patterns, fn):
                result.append(Path(dp) / fn)

    if errors:
        if on_error is None:
            raise errors[0]
        for err in errors:
            on_error(err)
    return result
