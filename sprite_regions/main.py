#!/usr/bin/env python3
"""
Sprite Region Detection Tool - Command Line Interface

Finds the sprites in a spritesheet image and writes their bounding boxes as
JSON or XML animation metadata.

Sprites are the connected groups of non-transparent pixels. If the image has
no alpha channel, a mask color can be given to act as the background. Sprites
whose tops lie within a tolerance of each other form a row (one animation),
and all frames of a row are resized to a common, bottom-aligned size.
"""

import logging
from contextlib import contextmanager
from pathlib import Path

import click
import cv2

from sprite_regions.api import DEFAULT_Y_TOLERANCE, detect_sprites
from sprite_regions.export import DEFAULT_DURATION, DEFAULT_FRAME_NAME, to_json, to_xml
from sprite_regions.pixel import Pixel, PixelGrid
from sprite_regions.visualization import visualize_regions


class ClickEchoHandler(logging.Handler):
    """Logging handler writing records to stderr through click.echo."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


@contextmanager
def _cli_logging(verbose: bool):
    """
    Show the library's warnings (and with verbose, its debug messages) for
    the duration of one command.
    """
    package_logger = logging.getLogger("sprite_regions")
    handler = ClickEchoHandler()
    if verbose:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    else:
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    previous_level = package_logger.level
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.addHandler(handler)
    try:
        yield
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


def _parse_mask_color(_ctx, _param, value: str | None) -> Pixel | None:
    if value is None:
        return None
    try:
        return Pixel.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.command(context_settings=dict(show_default=True))
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False), required=False)
@click.option('--y-tolerance', '-t', type=click.IntRange(min=0), default=DEFAULT_Y_TOLERANCE,
              help='Maximum Y distance in pixels for sprites to share a row')
@click.option('--mask-color', '-m', callback=_parse_mask_color,
              help='Background color as R,G,B or R,G,B,A, instead of alpha transparency')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'xml']),
              help='Output format  [default: from OUTPUT_PATH suffix, else json]')
@click.option('--flat', is_flag=True, help='Export a flat list of frames instead of rows')
@click.option('--frame-name', '-n', default=DEFAULT_FRAME_NAME,
              help='Name of the coordinate block of each frame')
@click.option('--duration', '-d', type=float, default=DEFAULT_DURATION,
              help='Duration of each frame')
@click.option('--debug-image', type=click.Path(dir_okay=False),
              help='Save the image with detected regions outlined')
@click.option('--verbose', '-v', is_flag=True, help='Log progress messages')
def main(input_path: str, output_path: str | None, y_tolerance: int, mask_color: Pixel | None,
         output_format: str | None, flat: bool, frame_name: str, duration: float,
         debug_image: str | None, verbose: bool) -> None:
    """Detect the sprites in a spritesheet and export their regions.

    INPUT_PATH is the path to the spritesheet image.

    OUTPUT_PATH is where the JSON or XML document is written. If omitted,
    the document is printed to standard output.
    """
    with _cli_logging(verbose):
        if output_format is None:
            output_format = 'xml' if output_path and Path(output_path).suffix.lower() == '.xml' else 'json'

        # Load the image
        img = cv2.imread(input_path, cv2.IMREAD_UNCHANGED)
        if img is None:
            click.echo(f"Error: Could not load image from {input_path}", err=True)
            raise SystemExit(1)
        if output_path:
            click.echo(f"Loaded image with shape {img.shape}")

        try:
            grid = PixelGrid.from_image(img)
            regions = detect_sprites(grid, y_tolerance=y_tolerance, transparency_mask=mask_color)
            export = to_xml if output_format == 'xml' else to_json
            document = export(regions, frame_name, duration, y_tolerance=y_tolerance, grouped=not flat)
        except ValueError as e:
            click.echo(f"Error processing image: {e}", err=True)
            raise SystemExit(1)

        if debug_image:
            visualize_regions(img, regions, output_path=debug_image)

        if output_path is None:
            click.echo(document.rstrip("\n"))
            return

        output_dir = Path(output_path).parent
        output_dir.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(document, encoding='utf-8')
        click.echo(f"Found {len(regions)} sprite(s), saved {output_format.upper()} to {output_path}")


if __name__ == "__main__":
    main()
