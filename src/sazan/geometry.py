"""
Geometry types shared by the cropping, grid and tiling routines.
"""

from typing import NamedTuple, Tuple


class Rectangle(NamedTuple):
    """A crop region given by its size and top-left offset."""

    width: int
    height: int
    x: int
    y: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Return the (left, top, right, bottom) box expected by Pillow."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the rectangle lies inside an image of the given size."""
        if min(self) < 0:
            return False
        return self.x + self.width <= width and self.y + self.height <= height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}+{self.x}+{self.y}"


class GridSpec(NamedTuple):
    """Number of columns and rows of a grid layout."""

    cols: int
    rows: int

    @property
    def cells(self) -> int:
        return self.cols * self.rows

    def cell_origin(self, index: int, cell_width: int, cell_height: int) -> Tuple[int, int]:
        # Row-major: left to right, then top to bottom
        return ((index % self.cols) * cell_width, (index // self.cols) * cell_height)

    def __str__(self) -> str:
        return f"{self.cols}x{self.rows}"


def validate_grid(cols: int, rows: int) -> GridSpec:
    """
    Build a GridSpec, rejecting non-positive dimensions.

    Raises:
        ValueError: If cols or rows is smaller than 1
    """
    if cols < 1 or rows < 1:
        raise ValueError(f"Grid dimensions must be positive, got {cols}x{rows}")
    return GridSpec(cols, rows)
