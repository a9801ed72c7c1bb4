"""
Image splitting functionality.

This module splits images into grids of fixed-size tiles and packages the
tiles, each encoded as PNG, into a single ZIP archive.
"""

import io
import logging
import zipfile
from typing import Iterator, List, Sequence, Tuple

from PIL import Image

from sazan.geometry import Rectangle, validate_grid
from sazan.image_ops import encode_png
from sazan.parsing import PREFIX_PATTERN
from sazan.processing.crop import crop_image

logger = logging.getLogger("sazan.export.image_splitter")

TILE_EXTENSION = "png"

# Fixed entry timestamp so identical inputs give identical archives
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def tile_filename(prefix, image_index, row, col, ext=TILE_EXTENSION):
    """
    Build the archive name of a tile, e.g. ``tile_00_01_02.png``.

    Args:
        prefix: Filename prefix
        image_index: Index of the source image
        row: Tile row
        col: Tile column
        ext: File extension without the dot

    Returns:
        The tile filename
    """
    return f"{prefix}_{image_index:02d}_{row:02d}_{col:02d}.{ext}"


def iter_tile_rectangles(
    tile_size: Tuple[int, int], offset: Tuple[int, int], cols: int, rows: int
) -> Iterator[Tuple[int, int, Rectangle]]:
    """
    Yield (row, col, rectangle) for every tile of the grid in row-major order.
    """
    tile_width, tile_height = tile_size
    offset_x, offset_y = offset
    for row in range(rows):
        for col in range(cols):
            x = offset_x + col * tile_width
            y = offset_y + row * tile_height
            yield row, col, Rectangle(tile_width, tile_height, x, y)


def split_image_to_tiles(
    image: Image.Image,
    tile_size: Tuple[int, int],
    offset: Tuple[int, int],
    cols: int,
    rows: int,
) -> List[Tuple[int, int, Image.Image]]:
    """
    Split one image into a cols x rows grid of equal-sized tiles.

    Args:
        image: PIL Image to split
        tile_size: (width, height) of each tile in pixels
        offset: (x, y) of the top-left corner of the first tile
        cols: Number of tile columns
        rows: Number of tile rows

    Returns:
        List of (row, col, tile) tuples in row-major order

    Raises:
        BoundsError: If any tile extends past the image
    """
    validate_grid(cols, rows)
    return [
        (row, col, crop_image(image, rect))
        for row, col, rect in iter_tile_rectangles(tile_size, offset, cols, rows)
    ]


def crop_and_split_images(
    images: Sequence[Image.Image],
    tile_size: Tuple[int, int],
    offset: Tuple[int, int],
    cols: int,
    rows: int,
    prefix: str,
) -> bytes:
    """
    Split every image into tiles and package all tiles into a ZIP archive.

    Tiles are written in image -> row -> col order and named
    ``{prefix}_{image:02}_{row:02}_{col:02}.png``. The archive itself is not
    compressed since PNG tiles already are.

    Args:
        images: Source images, in archive index order
        tile_size: (width, height) of each tile in pixels
        offset: (x, y) where tiling starts in each image
        cols: Number of tile columns
        rows: Number of tile rows
        prefix: Filename prefix for every tile

    Returns:
        The complete ZIP archive as bytes

    Raises:
        BoundsError: If a tile extends past its source image
        EncodeError: If a tile cannot be encoded as PNG
        ValueError: If the grid is empty or the prefix contains characters
            other than letters, digits, "_" and "-"
    """
    validate_grid(cols, rows)
    if not PREFIX_PATTERN.fullmatch(prefix):
        raise ValueError(f"Invalid tile prefix: {prefix!r}")

    buffer = io.BytesIO()
    tile_count = 0

    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as zip_file:
        for image_index, image in enumerate(images):
            for row, col, tile in split_image_to_tiles(image, tile_size, offset, cols, rows):
                info = zipfile.ZipInfo(
                    tile_filename(prefix, image_index, row, col), date_time=ZIP_DATE_TIME
                )
                info.compress_type = zipfile.ZIP_STORED
                zip_file.writestr(info, encode_png(tile))
                tile_count += 1

    logger.info(
        f"Packed {tile_count} tile(s) from {len(images)} image(s) "
        f"into archive of {buffer.tell()} bytes"
    )
    return buffer.getvalue()
