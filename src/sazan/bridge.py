"""
Raw RGBA byte-buffer entry points.

These functions take flat pixel buffers plus their dimensions, as handed over
by a host such as a browser canvas, and return raw bytes. The buffer length is
checked before any image is built.
"""

import logging
from typing import List, Sequence

import numpy as np
from PIL import Image

from sazan.exceptions import BufferLengthError
from sazan.export.image_splitter import crop_and_split_images
from sazan.geometry import Rectangle
from sazan.processing.grid import crop_and_grid_images

logger = logging.getLogger("sazan.bridge")

BYTES_PER_PIXEL = 4  # RGBA


def greet() -> str:
    """Smoke-test entry point for hosts embedding the bridge."""
    return "Hello, sazan!"


def image_from_rgba_bytes(rgba: bytes, width: int, height: int) -> Image.Image:
    """
    Build an RGBA image from raw pixel bytes.

    Raises:
        BufferLengthError: If len(rgba) != width * height * 4
    """
    expected = width * height * BYTES_PER_PIXEL
    if width < 1 or height < 1:
        raise BufferLengthError(f"Invalid image dimensions {width}x{height}")
    if len(rgba) != expected:
        raise BufferLengthError(
            f"Invalid buffer length for {width}x{height} RGBA image: "
            f"expected {expected} bytes, got {len(rgba)}"
        )
    pixels = np.frombuffer(rgba, dtype=np.uint8).reshape((height, width, BYTES_PER_PIXEL))
    return Image.fromarray(pixels)


def images_from_rgba_buffer(
    images_rgba: bytes, width: int, height: int, count: int
) -> List[Image.Image]:
    """
    Split a buffer of `count` concatenated RGBA images into PIL images.

    Raises:
        BufferLengthError: If the buffer length does not match exactly
    """
    single_len = width * height * BYTES_PER_PIXEL
    expected = single_len * count
    if count < 0:
        raise BufferLengthError(f"Invalid image count {count}")
    if len(images_rgba) != expected:
        raise BufferLengthError(
            f"Invalid buffer length for {count} RGBA image(s) of {width}x{height}: "
            f"expected {expected} bytes, got {len(images_rgba)}"
        )

    view = memoryview(images_rgba)
    return [
        image_from_rgba_bytes(view[i * single_len : (i + 1) * single_len], width, height)
        for i in range(count)
    ]


def flatten_images_to_rgba(images: Sequence[Image.Image]) -> bytes:
    """Concatenate the RGBA pixels of several images into one buffer."""
    return b"".join(img.convert("RGBA").tobytes() for img in images)


def crop_and_grid_rgba(
    images_rgba: bytes,
    image_width: int,
    image_height: int,
    num_images: int,
    crop_left: int,
    crop_top: int,
    crop_width: int,
    crop_height: int,
    grid_cols: int,
    grid_rows: int,
) -> bytes:
    """
    Crop and grid several raw RGBA images.

    Returns:
        RGBA bytes of the composed image, which is
        (crop_width * grid_cols) x (crop_height * grid_rows) pixels
        (grid_cols x grid_rows when num_images is 0)
    """
    images = images_from_rgba_buffer(images_rgba, image_width, image_height, num_images)
    crop = Rectangle(crop_width, crop_height, crop_left, crop_top)
    result = crop_and_grid_images(images, crop, grid_cols, grid_rows)
    logger.debug(f"Bridge composed {num_images} image(s) into {result.size}")
    return result.tobytes()


def crop_and_split_rgba(
    images_rgba: bytes,
    image_width: int,
    image_height: int,
    num_images: int,
    tile_width: int,
    tile_height: int,
    offset_x: int,
    offset_y: int,
    grid_cols: int,
    grid_rows: int,
    prefix: str = "tile",
) -> bytes:
    """
    Split several raw RGBA images into tiles.

    Returns:
        ZIP archive bytes with one PNG per tile
    """
    images = images_from_rgba_buffer(images_rgba, image_width, image_height, num_images)
    return crop_and_split_images(
        images,
        (tile_width, tile_height),
        (offset_x, offset_y),
        grid_cols,
        grid_rows,
        prefix,
    )
