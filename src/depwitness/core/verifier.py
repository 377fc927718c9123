"""Verification of a computed inventory against the trusted manifest.

Rules, applied to every inventory key in canonical order:

- No assertion for the key: ``MissingAssertionError``.
- Assertion digest differs from the computed one: ``DigestMismatchError``.
- Otherwise the artifact is verified.

Assertions for keys that are not in the inventory are inert. A dependency
that was removed from the build leaves its pin behind harmlessly; it is
reported in ``VerificationResult.inert`` and never fails verification.

An empty manifest means verification has not been configured, so nothing
is checked and the result is marked ``configured=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from depwitness.core.keys import DependencyKey
from depwitness.exceptions import (
    DigestMismatchError,
    MissingAssertionError,
    VerificationError,
    VerificationFailedError,
)

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of a successful verification run.

    Attributes:
        configured: False when the manifest was empty and nothing was checked.
        verified: Keys whose digest matched, in canonical order.
        inert: Manifest keys with no matching inventory entry.
    """

    configured: bool = True
    verified: list[DependencyKey] = field(default_factory=list)
    inert: list[DependencyKey] = field(default_factory=list)

    @property
    def verified_count(self) -> int:
        return len(self.verified)


class Verifier:
    """Checks inventory digests against manifest assertions.

    Args:
        fail_fast: Raise on the first violation (default). When False,
            every violation is collected and raised together as a
            ``VerificationFailedError``, first violation first.
    """

    def __init__(self, fail_fast: bool = True) -> None:
        self.fail_fast = fail_fast

    def check(
        self, key: DependencyKey, actual: str, manifest: Mapping[DependencyKey, str]
    ) -> VerificationError | None:
        """Return the violation for a single key, or None if it verifies."""
        expected = manifest.get(key)
        if expected is None:
            return MissingAssertionError(key)
        if expected.lower() != actual.lower():
            return DigestMismatchError(key, expected.lower(), actual.lower())
        return None

    def verify(
        self,
        inventory: Mapping[DependencyKey, str],
        manifest: Mapping[DependencyKey, str],
    ) -> VerificationResult:
        """Verify every inventory entry against the manifest.

        Raises:
            MissingAssertionError: Fail-fast mode, unpinned artifact.
            DigestMismatchError: Fail-fast mode, digest disagreement.
            VerificationFailedError: Collect-all mode, one or more violations.
        """
        if len(manifest) == 0:
            logger.info("No integrity assertions configured; skipping verification")
            return VerificationResult(configured=False)

        result = VerificationResult()
        violations: list[VerificationError] = []
        for key in sorted(inventory):
            logger.info("Verifying %s", key)
            violation = self.check(key, inventory[key], manifest)
            if violation is None:
                result.verified.append(key)
                continue
            if self.fail_fast:
                raise violation
            violations.append(violation)

        if violations:
            raise VerificationFailedError(violations)

        result.inert = sorted(k for k in manifest if k not in inventory)
        for key in result.inert:
            logger.debug("Assertion for %s matches no resolved artifact", key)
        return result
