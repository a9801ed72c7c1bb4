"""
Image builders shared by the tests.
"""

import io
import zipfile

import numpy as np
from PIL import Image


def make_pattern_image(width, height, seed=0):
    """RGBA image whose pixels vary with position and seed."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (xs + seed * 37) % 256
    pixels[..., 1] = (ys + seed * 59) % 256
    pixels[..., 2] = (xs * 7 + ys * 3 + seed) % 256
    pixels[..., 3] = 255
    return Image.fromarray(pixels)


def make_solid_image(width, height, color):
    return Image.new("RGBA", (width, height), color)


def png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def read_archive(data):
    """Return {name: RGBA image} for every entry of a ZIP archive, in order."""
    tiles = {}
    with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
        for name in zip_file.namelist():
            with Image.open(io.BytesIO(zip_file.read(name))) as img:
                tiles[name] = img.convert("RGBA")
    return tiles


RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
