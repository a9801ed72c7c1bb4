"""
Grid composition.

Arranges equally sized images on a single canvas, left to right then top to
bottom. Cells without an image are left fully transparent.
"""

import logging
from typing import Sequence

from PIL import Image

from sazan.exceptions import SizeMismatchError
from sazan.geometry import Rectangle, validate_grid
from sazan.processing.crop import crop_images

logger = logging.getLogger("sazan.processing.grid")

TRANSPARENT = (0, 0, 0, 0)


def combine_grid(images: Sequence[Image.Image], cols: int, rows: int) -> Image.Image:
    """
    Combine images into a grid layout.

    The cell size is taken from the first image. With no images at all a
    1x1 cell is used, giving a (cols, rows) transparent canvas.

    Args:
        images: Images to place, all of the same size
        cols: Number of grid columns
        rows: Number of grid rows

    Returns:
        RGBA image of size (cell_width * cols, cell_height * rows)

    Raises:
        ValueError: If cols or rows is not positive
        SizeMismatchError: If an image differs in size from the first one
    """
    grid = validate_grid(cols, rows)

    if images:
        cell_width, cell_height = images[0].size
    else:
        cell_width, cell_height = 1, 1

    if len(images) > grid.cells:
        logger.warning(
            f"{len(images)} images given for a {grid} grid; "
            f"ignoring the last {len(images) - grid.cells}"
        )

    canvas = Image.new("RGBA", (cell_width * grid.cols, cell_height * grid.rows), TRANSPARENT)
    empty_cell = None

    for i in range(grid.cells):
        x, y = grid.cell_origin(i, cell_width, cell_height)
        if i < len(images):
            cell = images[i]
            if cell.size != (cell_width, cell_height):
                raise SizeMismatchError(
                    f"Image {i} is {cell.size[0]}x{cell.size[1]}, "
                    f"expected {cell_width}x{cell_height}"
                )
            if cell.mode != "RGBA":
                cell = cell.convert("RGBA")
        else:
            if empty_cell is None:
                empty_cell = Image.new("RGBA", (cell_width, cell_height), TRANSPARENT)
            cell = empty_cell

        # Plain paste (no mask) so the cell's alpha is copied as-is
        canvas.paste(cell, (x, y, x + cell_width, y + cell_height))

    logger.debug(
        f"Combined {min(len(images), grid.cells)} image(s) into {grid} grid "
        f"of size {canvas.size[0]}x{canvas.size[1]}"
    )
    return canvas


def crop_and_grid_images(
    images: Sequence[Image.Image], crop: Rectangle, cols: int, rows: int
) -> Image.Image:
    """
    Crop every image to the same rectangle and combine the crops into a grid.

    Args:
        images: Source images, in the order they should appear in the grid
        crop: Rectangle (width, height, x, y) applied to each image
        cols: Number of grid columns
        rows: Number of grid rows

    Returns:
        The composed RGBA image
    """
    cropped = crop_images(images, Rectangle(*crop))
    return combine_grid(cropped, cols, rows)
