"""Compiled regex cache keyed by pattern source.

Caching only saves recompilation. Compile errors propagate on every call
and are never cached, so an invalid pattern is reported identically each time.
"""

import logging
import re
from functools import lru_cache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 256


def _compile(source: str | bytes) -> re.Pattern:
    return re.compile(source)


class PatternCache:
    """Thread-safe LRU of compiled patterns. A size of 0 disables caching."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE):
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self.maxsize = maxsize
        self._compile = lru_cache(maxsize=maxsize)(_compile) if maxsize else _compile

    def compile(self, source: str, binary: bool = False) -> re.Pattern:
        """Compile ``source``, encoding it to UTF-8 first for bytes subjects.

        Raises:
            re.error: If the pattern is invalid
            UnicodeEncodeError: If a binary pattern cannot be encoded
        """
        if binary:
            return self._compile(source.encode("utf-8"))
        return self._compile(source)

    def clear(self) -> None:
        if self.maxsize:
            self._compile.cache_clear()

    def hits(self) -> int:
        return self._compile.cache_info().hits if self.maxsize else 0


_cache = PatternCache()


def get_pattern_cache() -> PatternCache:
    return _cache


def set_cache_size(maxsize: int) -> None:
    """Replace the shared cache with a new one of the given size."""
    global _cache
    _cache = PatternCache(maxsize)
    logger.debug(f"Pattern cache size set to {maxsize}")


def compile_pattern(source: str, binary: bool = False) -> re.Pattern:
    return _cache.compile(source, binary=binary)
