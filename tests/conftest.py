"""Shared fixtures for depwitness tests.

Artifacts are written into a temporary directory laid out like the
dependency cache: ``<cache>/group/name/version/<hash>/<file>``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Create an empty dependency cache outside the project directory."""
    root = tmp_path / "gradle" / "caches" / "modules-2" / "files-2.1"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    proj = tmp_path / "workspace" / "app"
    proj.mkdir(parents=True)
    return proj


@pytest.fixture
def make_artifact(cache_root: Path) -> Callable[..., Path]:
    """Factory writing an artifact file into the cache.

    The content-hash directory is the SHA-1 of the content, mirroring
    the cache's own addressing.
    """

    def _make(
        group: str = "acme",
        name: str = "widget",
        version: str = "1.0",
        file_name: str | None = None,
        content: bytes = b"widget bytes",
    ) -> Path:
        file_name = file_name or f"{name}-{version}.jar"
        sha1 = hashlib.sha1(content).hexdigest()
        directory = cache_root / group / name / version / sha1
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / file_name
        path.write_bytes(content)
        return path

    return _make


def sha256_hex(content: bytes) -> str:
    """Reference digest for expectations."""
    return hashlib.sha256(content).hexdigest()


@pytest.fixture
def digest_of() -> Callable[[bytes], str]:
    """Return a helper computing the expected SHA-256 hex of some bytes."""
    return sha256_hex


@pytest.fixture(autouse=True)
def _clean_depwitness_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``DEPWITNESS_*`` variables from the outer shell out of tests."""
    for var in ("EXCLUDE", "MANIFEST", "WORKERS", "FAIL_FAST"):
        monkeypatch.delenv(f"DEPWITNESS_{var}", raising=False)
