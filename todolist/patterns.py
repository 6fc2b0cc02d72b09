"""
Shell-style glob matching for project markers and file extensions.

Patterns follow the classic shell rules: ``*`` and ``?`` match within a
single path element, ``[...]`` is a character class (negated with ``^`` or
``!``) and ``\\`` escapes the next character, inside classes too. Each
pattern is translated to a regular expression once. A malformed glob raises
PatternSyntaxError instead of silently matching literally. Matching is
case-sensitive.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Pattern, Tuple

from .errors import PatternSyntaxError


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    n = len(pattern)
    if i == n:
        raise PatternSyntaxError(pattern, "unterminated character class")
    ch = pattern[i]
    if ch == "\\":
        if i + 1 == n:
            raise PatternSyntaxError(pattern, "unterminated character class")
        return pattern[i + 1], i + 2
    if ch in "-]":
        raise PatternSyntaxError(pattern, f"misplaced {ch!r} in character class")
    return ch, i + 1


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """Regex for the class starting just after ``[`` at ``i``; returns it and the index past ``]``."""
    n = len(pattern)
    negate = i < n and pattern[i] in "^!"
    if negate:
        i += 1
    items = []
    while True:
        if i == n:
            raise PatternSyntaxError(pattern, "unterminated character class")
        if pattern[i] == "]":
            if not items:
                raise PatternSyntaxError(pattern, "empty character class")
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise PatternSyntaxError(pattern, f"reversed range {lo}-{hi}")
        if lo == hi:
            items.append(re.escape(lo))
        else:
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
    body = "".join(items)
    return (f"[^{body}]" if negate else f"[{body}]"), i


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern[str]:
    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        i += 1
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "\\":
            if i == n:
                raise PatternSyntaxError(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif ch == "[":
            cls, i = _translate_class(pattern, i)
            parts.append(cls)
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts))


def validate_pattern(pattern: str) -> str:
    """Return ``pattern`` unchanged or raise :class:`PatternSyntaxError`."""
    compile_pattern(pattern)
    return pattern


def is_match_any(patterns: Iterable[str], name: str) -> bool:
    """
    True if ``name`` matches at least one of ``patterns``.

    Stops at the first match. A malformed pattern raises PatternSyntaxError as
    soon as it is reached.
    """
    for pattern in patterns:
        if compile_pattern(pattern).fullmatch(name):
            return True
    return False
