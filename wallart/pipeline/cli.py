"""CLI entry-point for the wall detection pipeline."""

from __future__ import annotations

import logging

import click

from wallart.core.config import DetectorConfig, PlacementConfig
from wallart.pipeline.process import process_scene_to_json


@click.group()
@click.option("--debug", is_flag=True, help="Emit per-wall diagnostic traces.")
@click.pass_context
def main(ctx: click.Context, debug: bool):
    """Raycast wall detection and artwork placement for mesh scenes."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )


@main.command()
@click.argument("scene_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
@click.option("--artworks", default=0, show_default=True, help="Number of artworks to place.")
@click.option("--rays", default=16, show_default=True, help="Azimuth samples per height.")
@click.option("--heights", default=5, show_default=True, help="Number of sampling heights.")
@click.option("--spacing", default=3.0, show_default=True, help="Minimum spacing between artworks.")
@click.option("--height-from-floor", default=1.5, show_default=True, help="Artwork centre height.")
@click.option("--no-fuse", is_flag=True, help="Keep one wall per ray direction.")
@click.pass_context
def detect(
    ctx: click.Context,
    scene_file: str,
    output_file: str | None,
    artworks: int,
    rays: int,
    heights: int,
    spacing: float,
    height_from_floor: float,
    no_fuse: bool,
):
    """Detect walls in a mesh scene and produce a placement JSON."""
    debug = ctx.obj["debug"]
    json_str = process_scene_to_json(
        scene_file,
        output_path=output_file,
        artwork_count=artworks,
        detector_config=DetectorConfig(
            ray_directions=rays,
            height_samples=heights,
            fuse_coplanar=not no_fuse,
            debug=debug,
        ),
        placement_config=PlacementConfig(
            spacing=spacing,
            height_from_floor=height_from_floor,
            debug=debug,
        ),
    )
    click.echo(json_str)


if __name__ == "__main__":
    main()
