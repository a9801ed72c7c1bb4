"""
Export functionality for Sazan.
"""

from sazan.export.image_splitter import crop_and_split_images, tile_filename

__all__ = ["crop_and_split_images", "tile_filename"]
