"""DepWitness exception hierarchy.

All public exceptions inherit from DepWitnessError, giving callers a single
base class to catch when they want to handle any DepWitness-specific failure
without swallowing unrelated errors. Several also inherit from the builtin
exception matching their nature (``AssertionError``, ``OSError``,
``ValueError``) so generic handlers keep working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from depwitness.core.keys import DependencyKey


class DepWitnessError(Exception):
    """Base exception for all DepWitness errors."""


class MalformedCachePathError(DepWitnessError, AssertionError):
    """Raised when an artifact path does not follow the cache layout.

    The dependency cache stores files as
    ``.../group/name/version/contentHash/fileName``. A path with fewer
    than five segments did not come from that cache.
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Artifact path {path!r} does not end with "
            "group/name/version/hash/file"
        )
        self.path = path


class UnreadableArtifactError(DepWitnessError, OSError):
    """Raised when an artifact cannot be read for hashing."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read artifact {path}: {reason}")
        self.path = path
        self.reason = reason


class ManifestError(DepWitnessError):
    """Raised when a manifest document cannot be read or is structurally broken."""


class MalformedManifestEntryError(ManifestError, ValueError):
    """Raised when a manifest assertion is not a five-part entry.

    Covers truncated lines, empty fields, and assertions written in an
    obsolete manifest format.
    """

    def __init__(self, entry: str) -> None:
        super().__init__(f"Invalid or obsolete integrity assertion {entry!r}")
        self.entry = entry


class ListingError(DepWitnessError):
    """Raised when a resolved-artifact listing document is malformed."""


class ConfigError(DepWitnessError):
    """Raised when the DepWitness configuration is invalid."""


class VerificationError(DepWitnessError):
    """Base class for integrity violations found by the verifier."""

    def __init__(self, message: str, key: DependencyKey) -> None:
        super().__init__(message)
        self.key = key


class MissingAssertionError(VerificationError):
    """A resolved artifact has no pinned digest in the manifest."""

    def __init__(self, key: DependencyKey) -> None:
        super().__init__(f"No integrity assertion for dependency '{key}'", key)


class DigestMismatchError(VerificationError):
    """The pinned digest disagrees with the artifact's computed digest."""

    def __init__(self, key: DependencyKey, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum failed for '{key}': expected {expected}, got {actual}",
            key,
        )
        self.expected = expected
        self.actual = actual


class VerificationFailedError(DepWitnessError):
    """Raised in collect-all mode with every violation found, in key order."""

    def __init__(self, violations: Sequence[VerificationError]) -> None:
        self.violations = list(violations)
        lines = [str(v) for v in self.violations]
        super().__init__(
            f"{len(lines)} integrity violation(s):\n  " + "\n  ".join(lines)
        )
