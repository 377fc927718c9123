"""Tests for streaming SHA-256 content hashing."""

from __future__ import annotations

import hashlib
import io
from pathlib import Path

import pytest

from depwitness.core.hashing import sha256_file, sha256_stream
from depwitness.exceptions import UnreadableArtifactError


class TestSha256Stream:
    """Digest computation over byte streams."""

    def test_matches_hashlib(self) -> None:
        data = b"hello artifact"
        assert sha256_stream(io.BytesIO(data)) == hashlib.sha256(data).hexdigest()

    def test_empty_stream(self) -> None:
        assert sha256_stream(io.BytesIO(b"")) == hashlib.sha256(b"").hexdigest()

    def test_lowercase_hex_64_chars(self) -> None:
        digest = sha256_stream(io.BytesIO(b"\xff" * 10))
        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    @pytest.mark.parametrize("chunk_size", [1, 7, 4096, 1 << 20])
    def test_independent_of_chunk_size(self, chunk_size: int) -> None:
        data = bytes(range(256)) * 50
        expected = hashlib.sha256(data).hexdigest()
        assert sha256_stream(io.BytesIO(data), chunk_size) == expected

    def test_rejects_non_positive_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            sha256_stream(io.BytesIO(b"x"), 0)


class TestSha256File:
    """Hashing files from disk."""

    def test_file_digest(self, tmp_path: Path) -> None:
        path = tmp_path / "lib.jar"
        path.write_bytes(b"jar contents")
        assert sha256_file(path) == hashlib.sha256(b"jar contents").hexdigest()

    def test_file_not_modified(self, tmp_path: Path) -> None:
        path = tmp_path / "lib.jar"
        path.write_bytes(b"jar contents")
        before = path.stat().st_mtime_ns
        sha256_file(path)
        assert path.read_bytes() == b"jar contents"
        assert path.stat().st_mtime_ns == before

    def test_missing_file_raises_with_path(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope.jar"
        with pytest.raises(UnreadableArtifactError) as exc_info:
            sha256_file(missing)
        assert exc_info.value.path == str(missing)
        assert str(missing) in str(exc_info.value)

    def test_unreadable_is_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            sha256_file(tmp_path / "nope.jar")

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(UnreadableArtifactError):
            sha256_file(tmp_path)
