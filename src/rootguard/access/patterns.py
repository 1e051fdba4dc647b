"""Tool-name pattern matching.

Pure logic, no I/O.  A pattern without ``*`` is compared by exact,
case-sensitive equality.  Otherwise every ``*`` matches any run of
characters (including none) and everything else matches literally; the
whole name must match.

Unlike :mod:`fnmatch`, ``?`` and ``[...]`` carry no special meaning here.
"""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=1024)
def _compile(pattern: str) -> re.Pattern[str]:
    parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile(".*".join(parts), re.DOTALL)


def matches(name: str, pattern: str) -> bool:
    """Return ``True`` if *name* matches *pattern*."""
    if "*" not in pattern:
        return name == pattern
    return _compile(pattern).fullmatch(name) is not None


def matches_any(name: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """Return ``True`` if *name* matches at least one of *patterns*."""
    return any(matches(name, pattern) for pattern in patterns)
