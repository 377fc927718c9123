"""Inventory data models: scope listings, exclusion rules, the inventory.

These are plain data holders describing what the host build resolved
(``ScopeListing``, ``ResolvedArtifact``) and what DepWitness computed from
it (``Inventory``). They carry no hashing or filesystem logic.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from depwitness.core.keys import DependencyKey

# Declared version of a project-to-project reference inside a workspace.
UNSPECIFIED_VERSION = "unspecified"


# ---------------------------------------------------------------------------
# Host-provided listing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedArtifact:
    """One file resolved by the host build.

    Attributes:
        path: Absolute location of the file in the dependency cache.
        version: Version declared by the dependency that produced the file.
    """

    path: Path
    version: str

    @property
    def is_project_reference(self) -> bool:
        """True when the artifact is another project of the same workspace."""
        return self.version == UNSPECIFIED_VERSION


@dataclass(frozen=True)
class ScopeListing:
    """A dependency scope and the artifacts it resolved to.

    Attributes:
        name: Scope name (e.g. "compileClasspath").
        resolvable: Whether the scope can be resolved in this build
            phase. Declared-only scopes contribute nothing.
        artifacts: Resolved files, in resolution order.
    """

    name: str
    resolvable: bool = True
    artifacts: tuple[ResolvedArtifact, ...] = ()


@dataclass(frozen=True)
class ProjectListing:
    """Everything the host resolved for one project.

    Attributes:
        name: Project name, used for ``project:scope`` exclusions.
        directory: Project root. Files under it are local build outputs.
        scopes: Regular scopes in declaration order.
        buildscript_scopes: Build-tooling scopes, processed after ``scopes``.
    """

    name: str
    directory: Path
    scopes: tuple[ScopeListing, ...] = ()
    buildscript_scopes: tuple[ScopeListing, ...] = ()

    def all_scopes(self) -> tuple[ScopeListing, ...]:
        """Return every scope in processing order."""
        return self.scopes + self.buildscript_scopes


# ---------------------------------------------------------------------------
# Exclusions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExclusionRules:
    """Scope names (or ``project:scope`` pairs) that skip verification."""

    rules: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, value: str | Iterable[str] | None) -> ExclusionRules:
        """Build rules from a comma-separated string or a list of entries.

        Blank entries are ignored and surrounding whitespace is stripped.
        """
        if value is None:
            return cls()
        items = value.split(",") if isinstance(value, str) else value
        return cls(frozenset(i.strip() for i in items if i and i.strip()))

    def excludes(self, project_name: str, scope_name: str) -> bool:
        """Check whether a scope of the given project is excluded."""
        return (
            scope_name in self.rules
            or f"{project_name}:{scope_name}" in self.rules
        )

    def __bool__(self) -> bool:
        return bool(self.rules)


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


class Inventory(Mapping[DependencyKey, str]):
    """Read-only ``DependencyKey -> digest`` mapping in canonical key order."""

    def __init__(self, entries: Mapping[DependencyKey, str] | None = None) -> None:
        items = entries.items() if entries is not None else ()
        self._entries: dict[DependencyKey, str] = {
            key: digest.lower() for key, digest in sorted(items)
        }

    def __getitem__(self, key: DependencyKey) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[DependencyKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Inventory({len(self)} entries)"
