"""
Parsers for the textual crop, grid, size and offset parameters.

The parsers raise argparse.ArgumentTypeError so they can be passed straight
to ``argparse`` as ``type=``; the API reuses them for its form fields.
"""

import argparse
import re

from sazan.geometry import GridSpec, Rectangle

CROP_PATTERN = re.compile(r"^(\d+)x(\d+)\+(\d+)\+(\d+)$")
GRID_PATTERN = re.compile(r"^(\d+)x(\d+)$")
SIZE_PATTERN = GRID_PATTERN
OFFSET_PATTERN = re.compile(r"^(\d+)[+,](\d+)$")
PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


def parse_crop_param(value):
    """
    Parse a crop string like "1265x1265+1422+366" into a Rectangle.

    WIDTH and HEIGHT give the crop size, X and Y the top-left offset in the
    source image.
    """
    match = CROP_PATTERN.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid crop format: {value}")
    return Rectangle(*(int(group) for group in match.groups()))


def parse_grid_param(value):
    """Parse a grid string like "3x3" into a GridSpec of (cols, rows)."""
    match = GRID_PATTERN.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid grid format: {value}")
    cols, rows = (int(group) for group in match.groups())
    if cols < 1 or rows < 1:
        raise argparse.ArgumentTypeError(f"Grid dimensions must be positive: {value}")
    return GridSpec(cols, rows)


def parse_size_param(value):
    """Parse a tile size string like "512x256" into (width, height)."""
    match = SIZE_PATTERN.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid size format: {value}")
    width, height = (int(group) for group in match.groups())
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError(f"Tile size must be positive: {value}")
    return width, height


def parse_offset_param(value):
    """Parse an offset string like "10+20" or "10,20" into (x, y)."""
    match = OFFSET_PATTERN.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid offset format: {value}")
    return tuple(int(group) for group in match.groups())


def parse_prefix_param(value):
    """Check a tile filename prefix; only letters, digits, "_" and "-" are allowed."""
    if not PREFIX_PATTERN.fullmatch(value):
        raise argparse.ArgumentTypeError(f"Invalid tile prefix: {value}")
    return value
