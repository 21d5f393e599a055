"""Cached source parser adapter.

Decorator pattern: wraps SourceParserPort with a per-path cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from phpreflect.domain.model.source_file import SourceFile
from phpreflect.domain.ports.source_parser import SourceParserPort

logger = structlog.get_logger()


@dataclass
class CachedSourceParser(SourceParserPort):
    """Parser with a canonical-path keyed cache.

    Decorator pattern: wraps another SourceParserPort.
    Paths are canonicalized with Path.resolve() before lookup, so distinct
    spellings of the same file share one entry.

    No eviction and no invalidation: a file changed on disk after its first
    parse is not re-read for the lifetime of the cache.

    Attributes:
        _inner: Wrapped parser implementation
        _cache: Canonical path → SourceFile mapping
    """

    _inner: SourceParserPort
    _cache: dict[Path, SourceFile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self._inner is None:
            raise TypeError("_inner parser must not be None")

    def parse_file(self, path: Path) -> SourceFile:
        """Parse with cache lookup.

        Args:
            path: Path to .php file

        Returns:
            Parsed SourceFile (cached or fresh)

        Raises:
            ParseError: If file cannot be read or parsed
        """
        canonical = Path(path).resolve()
        cached = self._cache.get(canonical)
        if cached is not None:
            return cached

        logger.debug("source_cache_miss", path=str(canonical))
        source = self._inner.parse_file(canonical)
        self._cache[canonical] = source
        return source

    def parse_source(self, text: str, path: Path) -> SourceFile:
        """Parse in-memory source and cache it under its canonical path.

        A later parse_file() of the same path returns this result.

        Args:
            text: PHP source
            path: Path reported for the source

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If text is not valid PHP
        """
        canonical = Path(path).resolve()
        cached = self._cache.get(canonical)
        if cached is not None:
            return cached

        source = self._inner.parse_source(text, canonical)
        self._cache[canonical] = source
        return source

    def is_cached(self, path: Path) -> bool:
        """Check whether the file has already been parsed."""
        return Path(path).resolve() in self._cache

    @property
    def cache_size(self) -> int:
        """Number of cached files."""
        return len(self._cache)

    @property
    def cache_hit_paths(self) -> frozenset[Path]:
        """Paths currently in cache."""
        return frozenset(self._cache.keys())
