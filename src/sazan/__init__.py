"""
Sazan - crop images and arrange them into grids or tile archives.
"""

from sazan.export.image_splitter import crop_and_split_images
from sazan.geometry import GridSpec, Rectangle
from sazan.processing.crop import crop_image, crop_images
from sazan.processing.grid import combine_grid, crop_and_grid_images

__version__ = "0.1.0"

# Names used by the drivers
compose_grid = crop_and_grid_images
tile_to_archive = crop_and_split_images

__all__ = [
    "GridSpec",
    "Rectangle",
    "combine_grid",
    "compose_grid",
    "crop_and_grid_images",
    "crop_and_split_images",
    "crop_image",
    "crop_images",
    "tile_to_archive",
]
