"""Canonical artifact identities and cache-path key derivation.

A ``DependencyKey`` names one verifiable file: ``group:name:version:file``.
Keys are derived from the path an artifact occupies in the dependency
cache, whose layout is::

    <cache root>/group/name/version/<content hash>/<file name>

The content-hash directory is the cache's own addressing detail and is
not part of the artifact's identity, so it is dropped.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field

from depwitness.exceptions import MalformedCachePathError

# Number of trailing path segments that make up a cache entry.
_CACHE_SEGMENTS = 5


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class DependencyKey:
    """Identity of a single resolved artifact file.

    All fields are case-folded at construction. Equality, hashing and
    ordering are defined on the canonical ``group:name:version:file_tag``
    string only.

    Attributes:
        group: Publishing group or organisation (e.g. "com.squareup.okio").
        name: Artifact name (e.g. "okio").
        version: Resolved version string.
        file_tag: File name that distinguishes several files published
            under one version (classifier and extension included).
    """

    group: str
    name: str
    version: str
    file_tag: str
    canonical: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        parts = (self.group, self.name, self.version, self.file_tag)
        if any(not p for p in parts):
            raise ValueError(f"DependencyKey fields must be non-empty: {parts!r}")
        folded = tuple(p.lower() for p in parts)
        for attr, value in zip(("group", "name", "version", "file_tag"), folded):
            object.__setattr__(self, attr, value)
        object.__setattr__(self, "canonical", ":".join(folded))

    @property
    def coordinates(self) -> str:
        """Return ``group:name:version`` without the file tag."""
        return f"{self.group}:{self.name}:{self.version}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyKey):
            return NotImplemented
        return self.canonical == other.canonical

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DependencyKey):
            return NotImplemented
        return compare_keys(self, other) < 0

    def __hash__(self) -> int:
        return hash(self.canonical)

    def __str__(self) -> str:
        return self.canonical


def compare_keys(a: DependencyKey, b: DependencyKey) -> int:
    """Three-way comparison of two keys by canonical string.

    Returns:
        Negative if ``a`` sorts first, zero if equal, positive otherwise.
    """
    if a.canonical == b.canonical:
        return 0
    return -1 if a.canonical < b.canonical else 1


def derive_key(path: str | os.PathLike[str], separator: str = os.sep) -> DependencyKey:
    """Derive the canonical key for an artifact from its cache path.

    Only the last five path segments are used, so any number of leading
    directories (the cache root) may precede them.

    Args:
        path: Location of the artifact inside the dependency cache.
        separator: Path separator to split on. Defaults to the platform's.

    Returns:
        The ``DependencyKey`` for ``group/name/version/<hash>/file``.

    Raises:
        MalformedCachePathError: If the path has fewer than five segments.
    """
    raw = os.fspath(path)
    segments = [s for s in raw.lower().split(separator) if s]
    if len(segments) < _CACHE_SEGMENTS:
        raise MalformedCachePathError(raw)
    group, name, version, _content_hash, file_tag = segments[-_CACHE_SEGMENTS:]
    return DependencyKey(group, name, version, file_tag)
