"""Loading of resolved-artifact listings produced by the host build.

The listing is a YAML or JSON document describing, per dependency scope,
the files the host build resolved::

    project:
      name: app
      directory: .
    scopes:
      - name: compileClasspath
        resolvable: true
        artifacts:
          - path: /home/ci/.gradle/caches/modules-2/files-2.1/com.squareup.okio/okio/1.17.2/78c7.../okio-1.17.2.jar
            version: 1.17.2
    buildscript_scopes:
      - name: classpath
        artifacts: []

A relative ``project.directory`` is resolved against the listing file's
own directory. Scope order in the document is the processing order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from depwitness.core.inventory import ProjectListing, ResolvedArtifact, ScopeListing
from depwitness.exceptions import ListingError

_YAML_SUFFIXES = (".yaml", ".yml")


def _require(mapping: Any, key: str, where: str) -> Any:
    if not isinstance(mapping, dict) or key not in mapping:
        raise ListingError(f"{where}: missing required field {key!r}")
    return mapping[key]


def _parse_artifact(data: Any, where: str) -> ResolvedArtifact:
    path = _require(data, "path", where)
    version = _require(data, "version", where)
    if not isinstance(path, str) or not path:
        raise ListingError(f"{where}: 'path' must be a non-empty string")
    return ResolvedArtifact(path=Path(path), version=str(version))


def _parse_scopes(data: Any, where: str) -> tuple[ScopeListing, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        raise ListingError(f"{where}: expected a list of scopes")
    scopes: list[ScopeListing] = []
    for i, entry in enumerate(data):
        loc = f"{where}[{i}]"
        name = _require(entry, "name", loc)
        resolvable = entry.get("resolvable", True)
        if not isinstance(resolvable, bool):
            raise ListingError(f"{loc}: 'resolvable' must be true or false")
        raw_artifacts = entry.get("artifacts") or []
        if not isinstance(raw_artifacts, list):
            raise ListingError(f"{loc}: 'artifacts' must be a list")
        artifacts = tuple(
            _parse_artifact(a, f"{loc}.artifacts[{j}]")
            for j, a in enumerate(raw_artifacts)
        )
        scopes.append(ScopeListing(str(name), resolvable, artifacts))
    return tuple(scopes)


def listing_from_dict(data: Any, base_dir: Path | None = None) -> ProjectListing:
    """Build a ``ProjectListing`` from a parsed document.

    Args:
        data: Parsed YAML/JSON document.
        base_dir: Directory that a relative project directory is resolved
            against. Defaults to the current working directory.

    Raises:
        ListingError: If required fields are missing or mistyped.
    """
    if not isinstance(data, dict):
        raise ListingError("Listing document must be a mapping")
    project = _require(data, "project", "listing")
    name = _require(project, "name", "project")
    directory = Path(str(_require(project, "directory", "project")))
    if not directory.is_absolute():
        directory = (base_dir or Path.cwd()) / directory
    return ProjectListing(
        name=str(name),
        directory=directory,
        scopes=_parse_scopes(data.get("scopes"), "scopes"),
        buildscript_scopes=_parse_scopes(
            data.get("buildscript_scopes"), "buildscript_scopes"
        ),
    )


def load_listing(path: Path) -> ProjectListing:
    """Read a listing document from disk (YAML by suffix, JSON otherwise).

    Raises:
        ListingError: If the document cannot be parsed or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ListingError(f"Cannot read listing {path}: {exc}") from exc
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ListingError(f"Cannot parse listing {path}: {exc}") from exc
    return listing_from_dict(data, base_dir=path.parent.resolve())
