"""
Extract comment lines from source files.

Each physical line is classified as comment or code using three delimiters:
a single-line marker and the open/close markers of a block comment. Comment
lines keep their 1-based line number, so a gap in the numbers means code was
in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import FileAccessError
from .patterns import is_match_any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentDelimiters:
    single_line: str
    multi_line_open: str
    multi_line_close: str


@dataclass(frozen=True)
class CommentLine:
    line: int
    data: str


C_STYLE = CommentDelimiters("//", "/*", "*/")
HASH_STYLE = CommentDelimiters("#", "", "")

# Checked in order, first match wins.
FORMATS: Tuple[Tuple[Tuple[str, ...], CommentDelimiters], ...] = (
    (("*.go", "*.mod", "*.c", "*.h", "*.cc", "*.cpp", "*.hpp", "*.js", "*.ts",
      "*.java", "*.rs", "*.swift", "*.cs", "*.kt"), C_STYLE),
    (("*.py", "*.sh", "*.yml", "*.yaml", "*.toml", "Makefile", "*.mk"), HASH_STYLE),
)


def delimiters_for(path: Path) -> Optional[CommentDelimiters]:
    """Comment format of ``path`` judged by its file name, or None if unknown."""
    name = Path(path).name
    for patterns, delimiters in FORMATS:
        if is_match_any(patterns, name):
            return delimiters
    return None


def _after(text: str, token: str) -> Optional[str]:
    if not token:
        return None
    idx = text.find(token)
    if idx < 0:
        return None
    return text[idx + len(token):]


def _before(text: str, token: str) -> Optional[str]:
    if not token:
        return None
    idx = text.find(token)
    if idx < 0:
        return None
    return text[:idx]


def _reopens(rest: str, cs: CommentDelimiters) -> bool:
    """True if ``rest`` opens a block comment that it does not close again."""
    while True:
        opened = _after(rest, cs.multi_line_open)
        if opened is None:
            return False
        closed = _before(opened, cs.multi_line_close)
        if closed is None:
            return True
        rest = opened[len(closed) + len(cs.multi_line_close):]


def iter_comments(lines: Iterable[str], cs: CommentDelimiters) -> Iterator[CommentLine]:
    """
    Yield a CommentLine for every line of ``lines`` that is, wholly or in part,
    a comment.

    The first rule that applies decides the payload:

    1. block open marker: text after it, or between it and a close marker on
       the same line; the block stays open only if a later marker on the line
       reopens it;
    2. block close marker: text before it, the block ends;
    3. single-line marker: text after it;
    4. inside a block: the whole line.

    An empty payload is still yielded. A block left open at end of input is
    accepted.
    """
    in_block = False
    for idx, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")

        comment = _after(text, cs.multi_line_open)
        if comment is not None:
            inner = _before(comment, cs.multi_line_close)
            if inner is not None:
                in_block = _reopens(comment[len(inner) + len(cs.multi_line_close):], cs)
                comment = inner
            else:
                in_block = True
            yield CommentLine(idx, comment)
            continue

        comment = _before(text, cs.multi_line_close)
        if comment is not None:
            in_block = False
            yield CommentLine(idx, comment)
            continue

        comment = _after(text, cs.single_line)
        if comment is not None:
            yield CommentLine(idx, comment)
            continue

        if in_block:
            yield CommentLine(idx, text)


def find_comments(path: Path, cs: CommentDelimiters) -> List[CommentLine]:
    """Read ``path`` and return its comment lines. Raises FileAccessError."""
    try:
        with open(path, encoding="utf-8", errors="ignore") as fh:
            comments = list(iter_comments(fh, cs))
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc
    logger.debug("%s: %d comment line(s)", path, len(comments))
    return comments
