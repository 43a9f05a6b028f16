"""Command-line entry point for meteofusion."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from meteofusion.config import DEFAULT_LAT, DEFAULT_LON
from meteofusion.runner import FusionRunner
from meteofusion.storage import CoordinateCache
from meteofusion.ui.frontend import summarize_point_data


@click.command()
@click.option("--lat", type=float, default=DEFAULT_LAT, help="Latitude for the point fetch.")
@click.option("--lon", type=float, default=DEFAULT_LON, help="Longitude for the point fetch.")
@click.option("--refresh", is_flag=True, help="Ignore a valid cache document and fetch live.")
@click.option("--cache-dir", type=click.Path(path_type=Path), default=None, help="Cache directory.")
@click.option("--verbose", is_flag=True, help="Log progress to stderr.")
def main(lat: float, lon: float, refresh: bool, cache_dir: Path | None, verbose: bool) -> None:
    """
    Fetch and fuse both providers for one point and print a summary.
    """

    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    runner = FusionRunner(lat=lat, lon=lon, cache=CoordinateCache(cache_dir))
    document = runner.run(refresh=refresh)
    click.echo(json.dumps(summarize_point_data(document), indent=2))


if __name__ == "__main__":
    main()
