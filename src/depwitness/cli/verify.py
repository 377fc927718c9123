"""``depwitness verify <listing>`` — Check resolved artifacts against the manifest.

Builds the inventory of resolved artifacts, reads the trusted manifest and
verifies every artifact's digest.

Exit Codes:
    0 — All artifacts verified, or no manifest configured yet.
    1 — One or more integrity violations.
    2 — Input error (listing, config, manifest, cache path, unreadable file).
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from depwitness.cli._common import (
    config_option,
    exclude_option,
    listing_argument,
    load_inputs,
)
from depwitness.config import DEFAULT_MANIFEST_NAME
from depwitness.core.manifest import Manifest
from depwitness.core.verifier import VerificationResult, Verifier
from depwitness.exceptions import (
    DepWitnessError,
    DigestMismatchError,
    ManifestError,
    VerificationError,
    VerificationFailedError,
)


def _violation_to_json(violation: VerificationError) -> dict:
    """Convert a violation to a JSON-serializable dict."""
    data = {
        "kind": type(violation).__name__,
        "key": str(violation.key),
        "message": str(violation),
    }
    if isinstance(violation, DigestMismatchError):
        data["expected"] = violation.expected
        data["actual"] = violation.actual
    return data


def _result_to_json(result: VerificationResult) -> dict:
    return {
        "ok": True,
        "configured": result.configured,
        "verified": [str(k) for k in result.verified],
        "inert": [str(k) for k in result.inert],
        "violations": [],
    }


def _read_manifest(explicit: Path | None, default: Path) -> Manifest:
    """Read the manifest; only the default location may be absent."""
    if explicit is not None:
        if not explicit.is_file():
            raise ManifestError(f"Manifest not found: {explicit}")
        return Manifest.read(explicit)
    if not default.is_file():
        return Manifest()
    return Manifest.read(default)


@click.command("verify")
@listing_argument
@click.option(
    "--manifest", "manifest_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Trusted manifest (default: {DEFAULT_MANIFEST_NAME} beside LISTING).",
)
@exclude_option
@click.option(
    "--collect-all", is_flag=True, default=False,
    help="Report every violation instead of stopping at the first.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@config_option
def verify_command(
    listing: str,
    manifest_path: str | None,
    exclude: str | None,
    collect_all: bool,
    output_format: str,
    config_path: str | None,
) -> None:
    """Verify resolved dependencies against the trusted manifest.

    LISTING describes the artifacts the build resolved, per scope. Every
    artifact must have a matching pinned SHA-256 digest in the manifest.

    Exit code 0 if verified, 1 on violations, 2 on input errors.
    """
    from depwitness.cli.output import (
        print_error,
        print_verification_result,
        print_violations,
    )

    try:
        listing_path, config, inventory = load_inputs(
            listing,
            config_path,
            exclude=exclude,
            manifest=Path(manifest_path) if manifest_path else None,
            fail_fast=False if collect_all else None,
        )
        manifest = _read_manifest(
            config.manifest, listing_path.parent / DEFAULT_MANIFEST_NAME
        )
        result = Verifier(fail_fast=config.fail_fast).verify(inventory, manifest)
    except (VerificationError, VerificationFailedError) as exc:
        violations = (
            exc.violations if isinstance(exc, VerificationFailedError) else [exc]
        )
        if output_format == "json":
            click.echo(json.dumps({
                "ok": False,
                "violations": [_violation_to_json(v) for v in violations],
            }, indent=2))
        else:
            print_violations(violations)
        sys.exit(1)
    except DepWitnessError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            print_error(str(exc))
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps(_result_to_json(result), indent=2))
    else:
        print_verification_result(result)
    sys.exit(0)
