"""Shared fixtures for CLI tests.

Builds a small workspace: a dependency cache with two external artifacts,
a project directory with one local build output, and a YAML listing that
references all of them across a regular and a build-tooling scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner


@dataclass
class Workspace:
    """Paths of a generated CLI test workspace."""

    root: Path
    listing: Path
    project_dir: Path
    widget: Path
    gadget: Path

    def write_listing(self, extra_scopes: list[dict] | None = None) -> None:
        doc = {
            "project": {"name": "app", "directory": "app"},
            "scopes": [
                {
                    "name": "compileClasspath",
                    "artifacts": [
                        {"path": str(self.widget), "version": "1.0"},
                        {"path": str(self.project_dir / "build" / "libs" / "core.jar"),
                         "version": "unspecified"},
                    ],
                },
                *(extra_scopes or []),
            ],
            "buildscript_scopes": [
                {
                    "name": "classpath",
                    "artifacts": [{"path": str(self.gadget), "version": "2.1"}],
                },
            ],
        }
        self.listing.write_text(yaml.safe_dump(doc), encoding="utf-8")

    @property
    def manifest(self) -> Path:
        return self.root / "dependency-hashes.gradle"


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, make_artifact) -> Workspace:
    """Create a workspace whose listing resolves two cached artifacts."""
    project_dir = tmp_path / "app"
    (project_dir / "build" / "libs").mkdir(parents=True)
    (project_dir / "build" / "libs" / "core.jar").write_bytes(b"local")
    ws = Workspace(
        root=tmp_path,
        listing=tmp_path / "resolved.yaml",
        project_dir=project_dir,
        widget=make_artifact("acme", "widget", "1.0", content=b"widget"),
        gadget=make_artifact("acme", "gadget", "2.1", content=b"gadget"),
    )
    ws.write_listing()
    return ws
