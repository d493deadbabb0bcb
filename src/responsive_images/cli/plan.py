"""CLI command: responsive-images plan -- render a picture and print its plan."""

from __future__ import annotations

import dataclasses
import json
import sys

import click

from responsive_images.config import DensitySuffixRule, FallbackPolicy, ResponsiveImagesConfig
from responsive_images.errors import ResponsiveImagesError
from responsive_images.planner.middleware import logging_middleware
from responsive_images.renderers import PillowRenderer, StubRenderer
from responsive_images.service import ResponsiveImageService


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--sizes", required=True, help='Sizes string, e.g. "(max-width: 414px) 378px, 634px"')
@click.option("--densities", default="1,2", show_default=True, help="Pixel densities to render")
@click.option("--crop", default=None, help="JSON crop variant collection")
@click.option("--crop-variant", default="default", show_default=True, help="Crop variant name")
@click.option("--special-function", default=None, help='Special function, e.g. "square"')
@click.option("--file-extension", default=None, help="Target file extension")
@click.option("--absolute", is_flag=True, help="Emit absolute URLs (needs --site-url)")
@click.option("--site-url", default=None, help="Site URL for absolute URLs")
@click.option("--output-dir", default=None, help="Directory renditions are written to")
@click.option("--base-url", default=None, help="Public URL of the output directory")
@click.option("--workers", type=int, default=None, help="Concurrent renditions")
@click.option("--strict-densities", is_flag=True, help="Reject malformed densities")
@click.option("--exact-density-suffix", is_flag=True, help="Only omit the descriptor for exactly 1x")
@click.option(
    "--fallback",
    type=click.Choice([p.value for p in FallbackPolicy]),
    default=None,
    help="Which default size supplies the fallback image",
)
@click.option("--alt", default=None, help="Alternative text for the fallback image")
@click.option("--title", default=None, help="Title of the fallback image")
@click.option("--dry-run", is_flag=True, help="Compute URLs and sizes without writing files")
def plan(
    image: str,
    sizes: str,
    densities: str,
    crop: str | None,
    crop_variant: str,
    special_function: str | None,
    file_extension: str | None,
    absolute: bool,
    site_url: str | None,
    output_dir: str | None,
    base_url: str | None,
    workers: int | None,
    strict_densities: bool,
    exact_density_suffix: bool,
    fallback: str | None,
    alt: str | None,
    title: str | None,
    dry_run: bool,
) -> None:
    """Render IMAGE for every size and density and print the picture plan as JSON.

    Settings not given on the command line come from RESPONSIVE_IMAGES_*
    environment variables.
    """
    config = ResponsiveImagesConfig.from_env()
    overrides: dict = {}
    if site_url is not None:
        overrides["site_url"] = site_url
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if base_url is not None:
        overrides["base_url"] = base_url
    if workers is not None:
        overrides["max_workers"] = max(1, workers)
    if strict_densities:
        overrides["strict_densities"] = True
    if exact_density_suffix:
        overrides["density_suffix"] = DensitySuffixRule.EXACT
    if fallback is not None:
        overrides["fallback_policy"] = FallbackPolicy(fallback)
    config = dataclasses.replace(config, **overrides)

    if dry_run:
        renderer = StubRenderer(base_url=config.base_url)
    else:
        renderer = PillowRenderer(output_dir=config.output_dir, base_url=config.base_url)
    service = ResponsiveImageService(renderer, config, middleware=[logging_middleware()])

    try:
        result = service.render(
            image,
            sizes,
            densities,
            crop=crop,
            crop_variant=crop_variant,
            special_function=special_function,
            file_extension=file_extension,
            absolute=absolute,
            alt=alt,
            title=title,
        )
    except ResponsiveImagesError as exc:
        code = f" [{exc.code}]" if exc.code is not None else ""
        click.echo(f"Error{code}: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result.to_dict(), indent=2))
