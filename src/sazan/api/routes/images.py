"""
API route handlers for image files.

This module defines the FastAPI endpoints for:
- Cropping uploaded images and combining them into a grid (PNG response)
- Splitting uploaded images into tiles (ZIP response)
"""

import argparse
import asyncio
import io
import logging
from typing import List

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from sazan.api.config import DEFAULT_TILE_PREFIX, MAX_OUTPUT_PIXELS
from sazan.api.models import CropGridParams, CropSplitParams
from sazan.exceptions import SazanError
from sazan.export.image_splitter import crop_and_split_images
from sazan.image_ops import encode_png, image_from_bytes, normalize_images_to_max_size
from sazan.parsing import (
    parse_crop_param,
    parse_grid_param,
    parse_offset_param,
    parse_size_param,
)
from sazan.processing.grid import crop_and_grid_images

# Set up logging
logger = logging.getLogger("sazan.api.routes.images")

# Initialize router
router = APIRouter(prefix="/images", tags=["images"])


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


async def read_uploaded_images(files: List[UploadFile]):
    """
    Decode uploaded files into RGBA images, sorted by filename.

    Raises:
        HTTPException(400): If a file is not a readable image
    """
    ordered = sorted(files, key=lambda f: f.filename or "")
    images = []
    for upload in ordered:
        data = await upload.read()
        try:
            images.append(image_from_bytes(data, upload.filename or "<upload>"))
        except SazanError as e:
            raise _bad_request(str(e))
    return images


@router.post(
    "/crop-grid",
    summary="Crop Images Into a Grid",
    description="Pads the uploaded images to a common size, crops every one to the same "
    "rectangle and arranges the crops left to right, top to bottom in a grid. "
    "Cells without an image are transparent. Images are ordered by filename.",
    response_description="PNG image of the composed grid",
    responses={
        200: {
            "description": "Composed grid image",
            "content": {"image/png": {"schema": {"type": "string", "format": "binary"}}},
        },
        400: {
            "description": "Bad Request - Invalid parameters, unreadable image or crop out of bounds",
            "content": {
                "application/json": {"example": {"detail": "Invalid crop format: 100x100"}}
            },
        },
    },
)
async def crop_grid(
    images: List[UploadFile] = File(..., description="Image files to crop"),
    crop: str = Form(..., description="Crop rectangle as WIDTHxHEIGHT+X+Y"),
    grid: str = Form(..., description="Grid size as COLSxROWS"),
):
    """
    Crop uploaded images and return them combined into one PNG grid.

    Raises:
        HTTPException(400): If the parameters are invalid or cropping fails
        HTTPException(500): If there's an internal server error
    """
    try:
        rect = parse_crop_param(crop)
        grid_spec = parse_grid_param(grid)
    except argparse.ArgumentTypeError as e:
        raise _bad_request(str(e))

    try:
        params = CropGridParams(
            crop_width=rect.width,
            crop_height=rect.height,
            crop_left=rect.x,
            crop_top=rect.y,
            grid_cols=grid_spec.cols,
            grid_rows=grid_spec.rows,
        )
    except ValueError as e:
        raise _bad_request(f"Invalid parameters: {e}")
    if params.output_pixels > MAX_OUTPUT_PIXELS:
        raise _bad_request(
            "Output image too large. Please reduce the crop size or the grid dimensions."
        )

    # Uploads of different sizes are padded to the largest one, top-left anchored
    loaded = normalize_images_to_max_size(await read_uploaded_images(images))

    try:
        loop = asyncio.get_event_loop()
        result_img = await loop.run_in_executor(
            None, crop_and_grid_images, loaded, params.crop, params.grid_cols, params.grid_rows
        )
        png_data = await loop.run_in_executor(None, encode_png, result_img)
    except SazanError as e:
        raise _bad_request(str(e))
    except Exception as e:
        logger.error(f"Error composing grid: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error composing grid: {str(e)}",
        )

    logger.info(
        f"Composed {len(loaded)} image(s) into {params.grid} grid "
        f"({result_img.size[0]}x{result_img.size[1]})"
    )
    return StreamingResponse(
        content=io.BytesIO(png_data),
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=result.png"},
    )


@router.post(
    "/crop-split",
    summary="Split Images Into Tiles",
    description="Splits every uploaded image into a grid of equal-sized tiles starting at "
    "the given offset. Each tile is encoded as PNG and all tiles are returned in one ZIP "
    "archive, named PREFIX_IMAGE_ROW_COL.png. Images are ordered by filename.",
    response_description="ZIP archive of PNG tiles",
    responses={
        200: {
            "description": "Tile archive",
            "content": {
                "application/zip": {"schema": {"type": "string", "format": "binary"}}
            },
        },
        400: {
            "description": "Bad Request - Invalid parameters, unreadable image or tile out of bounds",
            "content": {
                "application/json": {"example": {"detail": "Invalid size format: 50"}}
            },
        },
    },
)
async def crop_split(
    images: List[UploadFile] = File(..., description="Image files to split"),
    tile_size: str = Form(..., description="Tile size as WIDTHxHEIGHT"),
    grid: str = Form(..., description="Tile grid as COLSxROWS"),
    offset: str = Form("0+0", description="Top-left corner of the first tile as X+Y"),
    prefix: str = Form(DEFAULT_TILE_PREFIX, description="Tile filename prefix"),
):
    """
    Split uploaded images into tiles and return them as a ZIP archive.

    Raises:
        HTTPException(400): If the parameters are invalid or tiling fails
        HTTPException(500): If there's an internal server error
    """
    try:
        tile_width, tile_height = parse_size_param(tile_size)
        offset_x, offset_y = parse_offset_param(offset)
        grid_spec = parse_grid_param(grid)
    except argparse.ArgumentTypeError as e:
        raise _bad_request(str(e))

    try:
        params = CropSplitParams(
            tile_width=tile_width,
            tile_height=tile_height,
            offset_x=offset_x,
            offset_y=offset_y,
            grid_cols=grid_spec.cols,
            grid_rows=grid_spec.rows,
            prefix=prefix,
        )
    except ValueError as e:
        raise _bad_request(f"Invalid parameters: {e}")

    loaded = await read_uploaded_images(images)

    try:
        loop = asyncio.get_event_loop()
        archive = await loop.run_in_executor(
            None,
            crop_and_split_images,
            loaded,
            params.tile_size,
            params.offset,
            params.grid_cols,
            params.grid_rows,
            params.prefix,
        )
    except SazanError as e:
        raise _bad_request(str(e))
    except Exception as e:
        logger.error(f"Error splitting images: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error splitting images: {str(e)}",
        )

    return StreamingResponse(
        content=io.BytesIO(archive),
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={params.prefix}.zip"},
    )
