"""Glob based exclusion rules for folder listings."""

from __future__ import annotations

import fnmatch
import re
from functools import lru_cache
from typing import Iterable, Iterator


def _expand(pattern: str) -> Iterator[str]:
    match = re.search(r"\{([^{}]*,[^{}]*)\}", pattern)
    if not match:
        yield pattern
        return
    prefix = pattern[: match.start()]
    suffix = pattern[match.end() :]
    for option in match.group(1).split(","):
        yield from _expand(prefix + option + suffix)


@lru_cache(maxsize=256)
def _expand_cached(pattern: str) -> tuple[str, ...]:
    return tuple(_expand(pattern))


def is_excluded(name: str, globs: Iterable[str]) -> bool:
    """Return ``True`` if the entry called *name* matches one of *globs*.

    Patterns are matched against the entry name only; a leading ``**/`` is
    accepted so the same globs read naturally for nested layouts.
    """

    for pattern in globs:
        for expanded in _expand_cached(pattern):
            if expanded.startswith("**/"):
                expanded = expanded[3:]
            if fnmatch.fnmatchcase(name, expanded):
                return True
    return False
