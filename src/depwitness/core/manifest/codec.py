"""Manifest parsing and deterministic serialization.

An assertion is one line ``group:name:version:file:sha256``, compared
case-insensitively. The committed manifest document wraps the assertions
in a fixed envelope so it can be dropped straight into a build script::

    dependencyVerification {
        verify = [
            'com.squareup.okio:okio:1.17.2:okio-1.17.2.jar:5a6f...e1',
        ]
    }

Serialization is byte-for-byte deterministic: entries are emitted in
canonical key order and the envelope never changes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from depwitness.core.keys import DependencyKey
from depwitness.core.manifest.models import Manifest
from depwitness.exceptions import ManifestError, MalformedManifestEntryError

_ASSERTION_FIELDS = 5

_ENVELOPE_OPEN = "dependencyVerification {\n    verify = [\n"
_ENVELOPE_CLOSE = "    ]\n}\n"
_ENTRY_INDENT = "        "

# Start of the verify list, and one item inside it: a quoted entry, the
# closing bracket, or a bare run of text up to the next separator.
_VERIFY_OPEN_RE = re.compile(r"verify\s*=\s*\[")
_ITEM_RE = re.compile(r"""'[^'\n]*'|"[^"\n]*"|\]|[^,\s\]]+""")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")


def parse_assertion(entry: str) -> tuple[DependencyKey, str]:
    """Parse one ``group:name:version:file:digest`` assertion.

    Raises:
        MalformedManifestEntryError: If the entry does not have exactly five
            non-empty colon-separated fields. The message quotes the entry
            verbatim.
    """
    parts = entry.strip().lower().split(":")
    if len(parts) != _ASSERTION_FIELDS or not all(parts):
        raise MalformedManifestEntryError(entry)
    group, name, version, file_tag, digest = parts
    return DependencyKey(group, name, version, file_tag), digest


def parse_assertions(entries: Iterable[str]) -> Manifest:
    """Parse an ordered sequence of assertion strings into a ``Manifest``.

    Later duplicates of the same key replace earlier ones.
    """
    assertions: dict[DependencyKey, str] = {}
    for entry in entries:
        key, digest = parse_assertion(entry)
        assertions[key] = digest
    return Manifest(assertions)


def read_manifest_document(text: str) -> Manifest:
    """Parse a full manifest document (envelope included).

    ``//`` line comments are ignored. Every item between ``verify = [`` and
    its closing ``]`` must be a single- or double-quoted assertion; anything
    else is rejected rather than skipped. A document with no ``verify``
    block yields an empty manifest.

    Raises:
        MalformedManifestEntryError: If an item is unquoted or malformed.
        ManifestError: If the ``verify`` list is never closed.
    """
    stripped = _LINE_COMMENT_RE.sub("", text)
    start = _VERIFY_OPEN_RE.search(stripped)
    if start is None:
        return Manifest()
    entries: list[str] = []
    for match in _ITEM_RE.finditer(stripped, start.end()):
        item = match.group(0)
        if item == "]":
            return parse_assertions(entries)
        if len(item) >= 2 and item[0] == item[-1] and item[0] in "'\"":
            entries.append(item[1:-1])
            continue
        raise MalformedManifestEntryError(item)
    raise ManifestError("Manifest 'verify' list is not closed with ']'")


def format_assertion(key: DependencyKey, digest: str) -> str:
    """Return the assertion string for one inventory entry."""
    return f"{key}:{digest.lower()}"


def serialize_manifest(inventory: Mapping[DependencyKey, str]) -> str:
    """Render an inventory as a complete manifest document."""
    lines = [_ENVELOPE_OPEN]
    for key in sorted(inventory):
        lines.append(f"{_ENTRY_INDENT}'{format_assertion(key, inventory[key])}',\n")
    lines.append(_ENVELOPE_CLOSE)
    return "".join(lines)


def write_manifest(inventory: Mapping[DependencyKey, str], path: Path) -> str:
    """Write the manifest document for ``inventory`` and return its text.

    Creates parent directories if they do not exist.
    """
    text = serialize_manifest(inventory)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return text
