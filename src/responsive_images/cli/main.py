"""responsive-images CLI entry point: Click group with subcommands."""

from __future__ import annotations

import dataclasses
import json
import logging

import click

from responsive_images import __version__
from responsive_images.errors import InvalidPixelDensity
from responsive_images.parser import parse_pixel_densities, parse_sizes


@click.group()
@click.version_option(version=__version__, prog_name="responsive-images")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """Plan the renditions of responsive <picture> elements."""
    level = logging.WARNING - 10 * min(verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


@cli.command("parse-sizes")
@click.argument("sizes")
def parse_sizes_command(sizes: str) -> None:
    """Show how a sizes string is split into size definitions."""
    definitions = [dataclasses.asdict(d) for d in parse_sizes(sizes)]
    click.echo(json.dumps(definitions, indent=2))


@cli.command("parse-densities")
@click.argument("densities")
@click.option("--strict", is_flag=True, help="Reject densities that are not positive numbers")
def parse_densities_command(densities: str, strict: bool) -> None:
    """Show how a pixel density list is parsed."""
    try:
        values = parse_pixel_densities(densities, strict=strict)
    except InvalidPixelDensity as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(values))


# Import and register subcommands
from responsive_images.cli.plan import plan  # noqa: E402

cli.add_command(plan)
