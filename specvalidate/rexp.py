"""A thread-safe cache of compiled regular expressions."""

from __future__ import annotations

import re
import threading

_cache: dict[str, re.Pattern[str]] = {}
_lock = threading.Lock()


def compile_regexp(pattern: str) -> re.Pattern[str]:
    """Compile a pattern, reusing a cached compilation.

    Raises re.error when the pattern is invalid.
    """
    cached = _cache.get(pattern)
    if cached is not None:
        return cached
    compiled = re.compile(pattern)
    with _lock:
        return _cache.setdefault(pattern, compiled)


def must_compile_regexp(pattern: str) -> re.Pattern[str]:
    """Compile a pattern that is expected to be valid.

    Used for patterns fixed in code; an invalid one raises re.error.
    """
    return compile_regexp(pattern)