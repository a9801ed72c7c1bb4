"""
Command-line interface for Sazan.

This module provides the following commands:
- crop-grid: Crop images and montage them into a grid
- crop-split: Crop images into tiles and package them as a ZIP archive
- api: Start the HTTP API server
"""

import argparse
import logging
import os
import sys

from sazan import __version__
from sazan.exceptions import SazanError
from sazan.export.image_splitter import crop_and_split_images
from sazan.image_ops import load_images, save_image
from sazan.parsing import (
    parse_crop_param,
    parse_grid_param,
    parse_offset_param,
    parse_prefix_param,
    parse_size_param,
)
from sazan.processing.grid import crop_and_grid_images

logger = logging.getLogger("sazan.cli")


def run_crop_grid(images, output, crop, grid):
    """
    Load images, crop them, arrange them in a grid and save the result.

    Args:
        images: List of image file paths (will be sorted)
        output: Output file path for the combined image
        crop: Crop rectangle as (width, height, x, y)
        grid: Grid size as (cols, rows)

    Returns:
        Path of the saved image
    """
    loaded_images = load_images(images)

    cols, rows = grid
    result_img = crop_and_grid_images(loaded_images, crop, cols, rows)

    save_image(result_img, output)
    print(f"Saved output image to {output}")
    return output


def run_crop_split(images, output, tile_size, offset, grid, prefix):
    """
    Load images, split each into a grid of tiles and write a ZIP archive.

    Args:
        images: List of image file paths (will be sorted)
        output: Output path of the ZIP archive
        tile_size: Tile size as (width, height)
        offset: Tiling start as (x, y)
        grid: Grid size as (cols, rows)
        prefix: Filename prefix for the tiles

    Returns:
        Path of the saved archive
    """
    loaded_images = load_images(images)

    cols, rows = grid
    archive = crop_and_split_images(loaded_images, tile_size, offset, cols, rows, prefix)

    output_dir = os.path.dirname(output)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(output, "wb") as f:
        f.write(archive)

    print(f"Saved tile archive to {output}")
    return output


def run_api_server(host, port):
    """
    Start the Sazan API server.
    """
    os.environ["SAZAN_API_HOST"] = host
    os.environ["SAZAN_API_PORT"] = str(port)

    from sazan.api.main import start_api

    start_api()


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sazan",
        description="Crop images and combine them into a grid or a tile archive",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="warning",
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    grid_parser = subparsers.add_parser(
        "crop-grid", help="Crop and montage images into a grid"
    )
    grid_parser.add_argument(
        "images", nargs="+", help="Image files (e.g. images/*.png)"
    )
    grid_parser.add_argument(
        "-o", "--output", default="result.png", help="Output file name (default: result.png)"
    )
    grid_parser.add_argument(
        "-c",
        "--crop",
        type=parse_crop_param,
        required=True,
        help="Crop in the format WIDTHxHEIGHT+X+Y (e.g. 1265x1265+1422+366)",
    )
    grid_parser.add_argument(
        "-g", "--grid", type=parse_grid_param, required=True, help="Grid size (e.g. 3x3, 4x2)"
    )

    split_parser = subparsers.add_parser(
        "crop-split", help="Split images into tiles and package them as a ZIP archive"
    )
    split_parser.add_argument(
        "images", nargs="+", help="Image files (e.g. images/*.png)"
    )
    split_parser.add_argument(
        "-o", "--output", default="result.zip", help="Output archive name (default: result.zip)"
    )
    split_parser.add_argument(
        "-s",
        "--tile-size",
        type=parse_size_param,
        required=True,
        help="Tile size in the format WIDTHxHEIGHT (e.g. 512x512)",
    )
    split_parser.add_argument(
        "--offset",
        type=parse_offset_param,
        default=(0, 0),
        help="Top-left corner of the first tile as X+Y (default: 0+0)",
    )
    split_parser.add_argument(
        "-g", "--grid", type=parse_grid_param, required=True, help="Tile grid (e.g. 3x3)"
    )
    split_parser.add_argument(
        "-p",
        "--prefix",
        type=parse_prefix_param,
        default="tile",
        help="Tile filename prefix of letters, digits, _ and - (default: tile)",
    )

    api_parser = subparsers.add_parser("api", help="Start the HTTP API server")
    api_parser.add_argument(
        "--host",
        default=os.environ.get("SAZAN_API_HOST", "0.0.0.0"),
        help="Host to bind the API server to",
    )
    api_parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("SAZAN_API_PORT", 8000)),
        help="Port to bind the API server to",
    )

    return parser


def main(argv=None):
    """
    Main entry point for Sazan with command-line argument parsing.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    numeric_level = getattr(logging, args.log_level.upper(), None)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "crop-grid":
            run_crop_grid(args.images, args.output, args.crop, args.grid)
        elif args.command == "crop-split":
            run_crop_split(
                args.images, args.output, args.tile_size, args.offset, args.grid, args.prefix
            )
        elif args.command == "api":
            run_api_server(args.host, args.port)
    except (SazanError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
