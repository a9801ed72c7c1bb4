"""
Basic image operations module.

Loading, encoding and saving of images, all in RGBA mode.
"""

import io
import logging
import os
from typing import Iterable, List, Sequence

from PIL import Image, UnidentifiedImageError

from sazan.exceptions import DecodeError, EncodeError

logger = logging.getLogger("sazan.image_ops")


def load_image(image_path):
    """
    Load an image from the given path and convert it to RGBA.

    Args:
        image_path: Path to the image file

    Returns:
        PIL Image object in RGBA mode

    Raises:
        FileNotFoundError: If the file does not exist
        DecodeError: If the file is not a readable image
    """
    if not os.path.isfile(image_path):
        raise FileNotFoundError(f"Image file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise DecodeError(f"Failed to open image '{image_path}': {e}") from e


def load_images(image_paths: Iterable[str], sort: bool = True) -> List[Image.Image]:
    """
    Load several images, aborting on the first one that fails.

    Args:
        image_paths: Paths to the image files
        sort: Sort the paths lexicographically before loading (default: True)

    Returns:
        List of RGBA images in processing order
    """
    paths = sorted(image_paths) if sort else list(image_paths)
    images = []
    for path in paths:
        images.append(load_image(path))
        logger.debug(f"Loaded {path} ({images[-1].size[0]}x{images[-1].size[1]})")
    return images


def image_from_bytes(data: bytes, name: str = "<bytes>") -> Image.Image:
    """
    Decode an encoded image (PNG, JPEG, ...) held in memory.

    Raises:
        DecodeError: If the data is not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise DecodeError(f"Failed to decode image '{name}': {e}") from e


def encode_png(image: Image.Image) -> bytes:
    """
    Encode an image as PNG.

    Raises:
        EncodeError: If Pillow fails to write the image
    """
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode image as PNG: {e}") from e
    return buffer.getvalue()


def save_image(image: Image.Image, output_path: str) -> str:
    """
    Save an image to disk, creating the parent directory if needed.

    The format is chosen from the file extension.

    Returns:
        The path the image was saved to

    Raises:
        EncodeError: If the image cannot be written
    """
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    try:
        image.save(output_path)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to save output image '{output_path}': {e}") from e
    return output_path


def normalize_images_to_max_size(images: Sequence[Image.Image]) -> List[Image.Image]:
    """
    Pad images to the largest width and height among them.

    Each image is placed at the top-left corner of a transparent canvas, so
    the same crop rectangle addresses the same pixels in every result.

    Args:
        images: Images of possibly different sizes

    Returns:
        List of RGBA images that all share the same size
    """
    if not images:
        return []

    max_width = max(img.size[0] for img in images)
    max_height = max(img.size[1] for img in images)

    normalized = []
    for img in images:
        rgba = img if img.mode == "RGBA" else img.convert("RGBA")
        if rgba.size == (max_width, max_height):
            normalized.append(rgba)
            continue
        canvas = Image.new("RGBA", (max_width, max_height), (0, 0, 0, 0))
        canvas.paste(rgba, (0, 0))
        normalized.append(canvas)
    return normalized
