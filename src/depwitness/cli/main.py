"""DepWitness CLI: content-hash pinning for resolved build dependencies.

Entry point for the ``depwitness`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    verify     — Check resolved artifacts against the trusted manifest.
    calculate  — Regenerate the manifest from the resolved artifacts.

Usage::

    depwitness verify build/resolved.yaml
    depwitness verify build/resolved.yaml --manifest dependency-hashes.gradle
    depwitness calculate build/resolved.yaml -o dependency-hashes.gradle
"""

from __future__ import annotations

import logging

import click

from depwitness import __version__
from depwitness.cli.calculate import calculate_command
from depwitness.cli.verify import verify_command


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log every checked artifact.")
def cli(verbose: bool) -> None:
    """DepWitness: Integrity verification for build dependencies.

    Hash every artifact the build resolved from the dependency cache and
    compare the digests against a committed, reviewed manifest.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(verify_command)
cli.add_command(calculate_command)
