"""Streaming SHA-256 content hashing for artifact files."""

from __future__ import annotations

import hashlib
import logging
import os
from typing import BinaryIO

from depwitness.exceptions import UnreadableArtifactError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096


def sha256_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Hash a binary stream in bounded chunks.

    The digest does not depend on ``chunk_size``; it only bounds how much
    of the stream is held in memory at once.

    Args:
        stream: Readable binary stream, consumed to EOF.
        chunk_size: Maximum bytes read per call.

    Returns:
        Lowercase hex SHA-256 digest (64 characters).
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    digest = hashlib.sha256()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()


def sha256_file(
    path: str | os.PathLike[str], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    """Hash a file's contents without loading it whole.

    Raises:
        UnreadableArtifactError: If the file is missing or cannot be read.
    """
    logger.debug("Hashing %s", path)
    try:
        with open(path, "rb") as fh:
            return sha256_stream(fh, chunk_size)
    except OSError as exc:
        raise UnreadableArtifactError(
            os.fspath(path), exc.strerror or str(exc)
        ) from exc
