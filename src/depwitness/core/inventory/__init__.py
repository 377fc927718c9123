"""Inventory of resolved artifacts and their content digests.

- ``models``: ``ResolvedArtifact``, ``ScopeListing``, ``ProjectListing``,
  ``ExclusionRules`` and the ordered ``Inventory`` mapping.
- ``builder``: ``InventoryBuilder``, which filters scopes, derives keys,
  deduplicates and hashes.
"""

from depwitness.core.inventory.builder import InventoryBuilder
from depwitness.core.inventory.models import (
    UNSPECIFIED_VERSION,
    ExclusionRules,
    Inventory,
    ProjectListing,
    ResolvedArtifact,
    ScopeListing,
)

__all__ = [
    "ExclusionRules",
    "Inventory",
    "InventoryBuilder",
    "ProjectListing",
    "ResolvedArtifact",
    "ScopeListing",
    "UNSPECIFIED_VERSION",
]
