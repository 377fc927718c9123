"""Trusted manifest of pinned artifact digests.

- ``models``: the ``Manifest`` mapping.
- ``codec``: assertion parsing and the deterministic document format.
"""

from depwitness.core.manifest.codec import (
    format_assertion,
    parse_assertion,
    parse_assertions,
    read_manifest_document,
    serialize_manifest,
    write_manifest,
)
from depwitness.core.manifest.models import Manifest

__all__ = [
    "Manifest",
    "format_assertion",
    "parse_assertion",
    "parse_assertions",
    "read_manifest_document",
    "serialize_manifest",
    "write_manifest",
]
