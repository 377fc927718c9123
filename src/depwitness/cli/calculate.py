"""``depwitness calculate <listing>`` — Regenerate the trusted manifest.

Hashes every resolved artifact and writes the manifest document, in
canonical order, for human review before it is committed.

Exit Codes:
    0 — Manifest written.
    2 — Input error (listing, config, cache path, unreadable file), or the
        manifest could not be written.
"""

from __future__ import annotations

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
from depwitness.core.manifest import write_manifest
from depwitness.exceptions import DepWitnessError


@click.command("calculate")
@listing_argument
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Output path (default: {DEFAULT_MANIFEST_NAME} beside LISTING).",
)
@exclude_option
@config_option
def calculate_command(
    listing: str,
    output: str | None,
    exclude: str | None,
    config_path: str | None,
) -> None:
    """Compute digests for resolved dependencies and write the manifest.

    The output is deterministic: the same resolved artifacts always produce
    a byte-identical document. Review it before committing.
    """
    from depwitness.cli.output import print_error, print_manifest_summary

    try:
        listing_path, _config, inventory = load_inputs(
            listing, config_path, exclude=exclude
        )
    except DepWitnessError as exc:
        print_error(str(exc))
        sys.exit(2)

    out_path = (
        Path(output) if output else listing_path.parent / DEFAULT_MANIFEST_NAME
    )
    try:
        text = write_manifest(inventory, out_path)
    except OSError as exc:
        print_error(f"Cannot write manifest {out_path}: {exc}")
        sys.exit(2)
    click.echo(text, nl=False)
    print_manifest_summary(len(inventory), out_path)
    sys.exit(0)
