"""
Rectangular cropping of images.
"""

import logging
from typing import List, Sequence

from PIL import Image

from sazan.exceptions import BoundsError
from sazan.geometry import Rectangle

logger = logging.getLogger("sazan.processing.crop")


def crop_image(image: Image.Image, rect: Rectangle) -> Image.Image:
    """
    Crop a single image to the given rectangle.

    Pillow pads out-of-range crops with black pixels, so the bounds are
    checked here and an error is raised instead.

    Args:
        image: PIL Image to crop
        rect: Rectangle (width, height, x, y) to keep

    Returns:
        New PIL Image of exactly (width, height)

    Raises:
        BoundsError: If the rectangle does not fit inside the image
    """
    rect = Rectangle(*rect)
    if not rect.fits_within(*image.size):
        raise BoundsError(rect, image.size)

    return image.crop(rect.box)


def crop_images(images: Sequence[Image.Image], rect: Rectangle) -> List[Image.Image]:
    """
    Crop every image to the same rectangle, keeping the input order.

    Args:
        images: Sequence of PIL Images
        rect: Rectangle (width, height, x, y) applied to each image

    Returns:
        List of cropped images
    """
    rect = Rectangle(*rect)
    logger.debug(f"Cropping {len(images)} image(s) to {rect}")
    return [crop_image(image, rect) for image in images]
