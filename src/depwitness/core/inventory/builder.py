"""Inventory construction from a resolved-artifact listing.

The builder walks scopes in the order given, then artifacts in resolution
order, and keeps the first occurrence of each key. Scopes are filtered
before any hashing happens:

1. Excluded scopes (by name or ``project:scope``) are skipped.
2. Scopes not resolvable in the current build phase are skipped.
3. Project-to-project references (version ``unspecified``) are skipped.
4. Files inside the project directory (local build outputs) are skipped.

Hashing may be spread over a thread pool. Digests are stored by key, so the
resulting ``Inventory`` is identical whatever the completion order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from depwitness.core.hashing import sha256_file
from depwitness.core.inventory.models import (
    ExclusionRules,
    Inventory,
    ProjectListing,
    ResolvedArtifact,
    ScopeListing,
)
from depwitness.core.keys import DependencyKey, derive_key

logger = logging.getLogger(__name__)


class InventoryBuilder:
    """Builds the ``DependencyKey -> digest`` inventory for one project.

    Example::

        builder = InventoryBuilder("app", Path("/work/app"),
                                   exclusions=ExclusionRules.parse("lint"))
        inventory = builder.build(listing.all_scopes())

    Args:
        project_name: Name used for ``project:scope`` exclusion entries.
        project_dir: Project root; files under it are never pinned.
        exclusions: Scopes to skip entirely.
        hasher: Callable returning the hex digest of a file.
        workers: Hashing threads. ``1`` hashes inline.
    """

    def __init__(
        self,
        project_name: str,
        project_dir: Path,
        exclusions: ExclusionRules | None = None,
        hasher: Callable[[Path], str] = sha256_file,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.project_name = project_name
        self.project_dir = Path(project_dir).resolve()
        self.exclusions = exclusions or ExclusionRules()
        self.hasher = hasher
        self.workers = workers

    @classmethod
    def for_listing(
        cls,
        listing: ProjectListing,
        exclusions: ExclusionRules | None = None,
        **kwargs,
    ) -> InventoryBuilder:
        """Create a builder configured for a loaded ``ProjectListing``."""
        return cls(listing.name, listing.directory, exclusions, **kwargs)

    # -- Filtering ----------------------------------------------------------

    def _is_excluded(self, scope: ScopeListing) -> bool:
        if self.exclusions.excludes(self.project_name, scope.name):
            logger.info(
                "Skipping excluded scope %s:%s", self.project_name, scope.name
            )
            return True
        return False

    def _is_local(self, artifact: ResolvedArtifact) -> bool:
        return Path(artifact.path).resolve().is_relative_to(self.project_dir)

    def select(self, scopes: Iterable[ScopeListing]) -> dict[DependencyKey, Path]:
        """Pick the artifact file to hash for every key, first-seen wins.

        Raises:
            MalformedCachePathError: If a pinnable artifact's path does not
                follow the cache layout. Raised before any file is hashed.
        """
        selected: dict[DependencyKey, Path] = {}
        for scope in scopes:
            if self._is_excluded(scope):
                continue
            if not scope.resolvable:
                logger.debug("Skipping unresolvable scope %s", scope.name)
                continue
            for artifact in scope.artifacts:
                if artifact.is_project_reference:
                    logger.debug("Skipping project reference %s", artifact.path)
                    continue
                if self._is_local(artifact):
                    logger.debug("Skipping project-local file %s", artifact.path)
                    continue
                key = derive_key(str(artifact.path))
                if key not in selected:
                    selected[key] = Path(artifact.path)
        return selected

    # -- Build --------------------------------------------------------------

    def build(self, scopes: Iterable[ScopeListing]) -> Inventory:
        """Hash every selected artifact and return the completed inventory.

        Raises:
            MalformedCachePathError: See ``select``.
            UnreadableArtifactError: If any artifact cannot be read. No
                partial inventory is returned.
        """
        selected = self.select(scopes)
        keys = list(selected)
        paths = [selected[k] for k in keys]
        if self.workers == 1 or len(paths) < 2:
            digests = [self.hasher(p) for p in paths]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                digests = list(pool.map(self.hasher, paths))
        logger.debug("Hashed %d artifact(s) for %s", len(keys), self.project_name)
        return Inventory(dict(zip(keys, digests)))
