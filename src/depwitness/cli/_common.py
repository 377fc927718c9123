"""Shared option handling for DepWitness subcommands."""

from __future__ import annotations

from pathlib import Path

import click

from depwitness.config import WitnessConfig, resolve_config
from depwitness.core.inventory import Inventory, InventoryBuilder
from depwitness.listing import load_listing

listing_argument = click.argument(
    "listing", type=click.Path(exists=True, dir_okay=False)
)
exclude_option = click.option(
    "--exclude",
    default=None,
    help="Comma-separated scopes (or project:scope) to skip.",
)
config_option = click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file (default: depwitness.yaml beside LISTING).",
)


def load_inputs(
    listing: str, config_path: str | None, **overrides
) -> tuple[Path, WitnessConfig, Inventory]:
    """Load config and listing, then build the inventory.

    Returns:
        The listing path, the resolved config, and the computed inventory.
    """
    listing_path = Path(listing)
    config = resolve_config(
        listing_path.parent,
        Path(config_path) if config_path else None,
    ).with_overrides(**overrides)
    project = load_listing(listing_path)
    builder = InventoryBuilder.for_listing(
        project, config.exclusions, workers=config.workers
    )
    return listing_path, config, builder.build(project.all_scopes())
