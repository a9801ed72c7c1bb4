"""
API route handlers for raw RGBA buffers.

The request body is the concatenated RGBA pixels of all input images, as
produced by a browser canvas. Dimensions travel as query parameters.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import Response

from sazan.api.config import DEFAULT_TILE_PREFIX, MAX_OUTPUT_PIXELS
from sazan.bridge import crop_and_grid_rgba, crop_and_split_rgba
from sazan.exceptions import SazanError
from sazan.parsing import PREFIX_PATTERN

# Set up logging
logger = logging.getLogger("sazan.api.routes.raw")

# Initialize router
router = APIRouter(prefix="/raw", tags=["raw"])


@router.post(
    "/crop-grid",
    summary="Crop Raw RGBA Images Into a Grid",
    response_description="Raw RGBA bytes of the composed grid",
)
async def raw_crop_grid(
    request: Request,
    image_width: int = Query(..., gt=0),
    image_height: int = Query(..., gt=0),
    num_images: int = Query(..., ge=0),
    crop_left: int = Query(0, ge=0),
    crop_top: int = Query(0, ge=0),
    crop_width: int = Query(..., gt=0),
    crop_height: int = Query(..., gt=0),
    grid_cols: int = Query(..., gt=0),
    grid_rows: int = Query(..., gt=0),
):
    """
    Crop and grid raw RGBA images.

    The response carries the output dimensions in the X-Image-Width and
    X-Image-Height headers.
    """
    if crop_width * grid_cols * crop_height * grid_rows > MAX_OUTPUT_PIXELS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Output image too large. Please reduce the crop size or the grid dimensions.",
        )

    body = await request.body()
    try:
        loop = asyncio.get_event_loop()
        out_rgba = await loop.run_in_executor(
            None,
            crop_and_grid_rgba,
            body,
            image_width,
            image_height,
            num_images,
            crop_left,
            crop_top,
            crop_width,
            crop_height,
            grid_cols,
            grid_rows,
        )
    except SazanError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if num_images:
        width, height = crop_width * grid_cols, crop_height * grid_rows
    else:
        width, height = grid_cols, grid_rows

    return Response(
        content=out_rgba,
        media_type="application/octet-stream",
        headers={"X-Image-Width": str(width), "X-Image-Height": str(height)},
    )


@router.post(
    "/crop-split",
    summary="Split Raw RGBA Images Into Tiles",
    response_description="ZIP archive of PNG tiles",
)
async def raw_crop_split(
    request: Request,
    image_width: int = Query(..., gt=0),
    image_height: int = Query(..., gt=0),
    num_images: int = Query(..., ge=0),
    tile_width: int = Query(..., gt=0),
    tile_height: int = Query(..., gt=0),
    offset_x: int = Query(0, ge=0),
    offset_y: int = Query(0, ge=0),
    grid_cols: int = Query(..., gt=0),
    grid_rows: int = Query(..., gt=0),
    prefix: str = Query(DEFAULT_TILE_PREFIX, pattern=PREFIX_PATTERN.pattern),
):
    """
    Split raw RGBA images into tiles and return them as a ZIP archive.
    """
    body = await request.body()
    try:
        loop = asyncio.get_event_loop()
        archive = await loop.run_in_executor(
            None,
            crop_and_split_rgba,
            body,
            image_width,
            image_height,
            num_images,
            tile_width,
            tile_height,
            offset_x,
            offset_y,
            grid_cols,
            grid_rows,
            prefix,
        )
    except SazanError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={prefix}.zip"},
    )
