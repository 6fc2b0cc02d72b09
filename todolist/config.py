"""
Scan settings.

The defaults reproduce the classic Go workspace setup: a project is any
directory holding ``.git``, ``go.mod`` or a ``Makefile``, and only ``*.go``
and ``*.mod`` files are read.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

PROJECT_MARKERS: Tuple[str, ...] = (".git", "go.mod", "Makefile")
FILE_PATTERNS: Tuple[str, ...] = ("*.go", "*.mod")
TODO_TOKEN = "TODO:"
ROOT = Path("/")

LOG_LEVEL_ENV = "TODOLIST_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING


@dataclass(frozen=True)
class ScanConfig:
    root: Path = ROOT
    markers: Tuple[str, ...] = field(default=PROJECT_MARKERS)
    file_patterns: Tuple[str, ...] = field(default=FILE_PATTERNS)
    token: str = TODO_TOKEN


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Resolve the logging level from ``TODOLIST_LOG_LEVEL`` (name or number)."""
    env = os.environ if environ is None else environ
    raw = env.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL
