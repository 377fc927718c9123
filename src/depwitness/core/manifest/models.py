"""The trusted manifest: pinned ``DependencyKey -> digest`` assertions."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path

from depwitness.core.keys import DependencyKey
from depwitness.exceptions import ManifestError


class Manifest(Mapping[DependencyKey, str]):
    """Read-only set of integrity assertions, ordered by key.

    An empty manifest means verification has not been configured yet;
    it never means every artifact is trusted.
    """

    def __init__(self, assertions: Mapping[DependencyKey, str] | None = None) -> None:
        items = assertions.items() if assertions is not None else ()
        self._assertions: dict[DependencyKey, str] = {
            key: digest.lower() for key, digest in sorted(items)
        }

    def __getitem__(self, key: DependencyKey) -> str:
        return self._assertions[key]

    def __iter__(self) -> Iterator[DependencyKey]:
        return iter(self._assertions)

    def __len__(self) -> int:
        return len(self._assertions)

    def __repr__(self) -> str:
        return f"Manifest({len(self)} assertions)"

    @property
    def is_configured(self) -> bool:
        """True once at least one assertion is present."""
        return len(self._assertions) > 0

    @classmethod
    def read(cls, path: Path) -> Manifest:
        """Read a manifest document from disk.

        Raises:
            ManifestError: If the file is missing, unreadable or not UTF-8.
            MalformedManifestEntryError: If any assertion is malformed.
        """
        from depwitness.core.manifest.codec import read_manifest_document

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
        return read_manifest_document(text)
