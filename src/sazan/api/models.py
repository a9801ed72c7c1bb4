"""
Pydantic models for the Sazan API.

These models define the data structures used for API requests and responses.
"""

from typing import Tuple

from pydantic import BaseModel, Field

from sazan.geometry import GridSpec, Rectangle
from sazan.parsing import PREFIX_PATTERN


class HealthResponse(BaseModel):
    """Response of the health check endpoint."""

    name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    status: str = Field(..., description="Service status")


class CropGridParams(BaseModel):
    """Parsed parameters of a crop-and-grid request."""

    crop_width: int = Field(..., gt=0, description="Crop width in pixels")
    crop_height: int = Field(..., gt=0, description="Crop height in pixels")
    crop_left: int = Field(default=0, ge=0, description="Crop start x")
    crop_top: int = Field(default=0, ge=0, description="Crop start y")
    grid_cols: int = Field(..., gt=0, description="Number of grid columns")
    grid_rows: int = Field(..., gt=0, description="Number of grid rows")

    @property
    def crop(self) -> Rectangle:
        return Rectangle(self.crop_width, self.crop_height, self.crop_left, self.crop_top)

    @property
    def grid(self) -> GridSpec:
        return GridSpec(self.grid_cols, self.grid_rows)

    @property
    def output_pixels(self) -> int:
        return self.crop_width * self.grid_cols * self.crop_height * self.grid_rows


class CropSplitParams(BaseModel):
    """Parsed parameters of a crop-and-split request."""

    tile_width: int = Field(..., gt=0, description="Tile width in pixels")
    tile_height: int = Field(..., gt=0, description="Tile height in pixels")
    offset_x: int = Field(default=0, ge=0, description="Tiling start x")
    offset_y: int = Field(default=0, ge=0, description="Tiling start y")
    grid_cols: int = Field(..., gt=0, description="Number of tile columns")
    grid_rows: int = Field(..., gt=0, description="Number of tile rows")
    prefix: str = Field(
        default="tile",
        pattern=PREFIX_PATTERN.pattern,
        description="Filename prefix of every tile",
    )

    @property
    def tile_size(self) -> Tuple[int, int]:
        return (self.tile_width, self.tile_height)

    @property
    def offset(self) -> Tuple[int, int]:
        return (self.offset_x, self.offset_y)
