"""
FastAPI application entry point for the Sazan API.

This module sets up the FastAPI application, includes routes,
and handles CORS, error handling and middleware.
"""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sazan import __version__
from sazan.api.config import CORS_ORIGINS, MAX_FILE_SIZE
from sazan.api.models import HealthResponse
from sazan.api.routes import images, raw
from sazan.bridge import greet
from sazan.exceptions import SazanError

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("sazan.api")

# Create FastAPI app
app = FastAPI(
    title="Sazan API",
    description="API for cropping images into grids and tile archives",
    version=__version__,
)

# Add CORS middleware
cors_origins = CORS_ORIGINS.split(",") if CORS_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Image-Width", "X-Image-Height"],
)

# Add routes
app.include_router(images.router)
app.include_router(raw.router)


@app.get("/", tags=["health"], response_model=HealthResponse)
async def root() -> HealthResponse:
    """
    Root endpoint for health checks.

    Returns:
        API name, version, and status.
    """
    return HealthResponse(name="Sazan API", version=__version__, status="online")


@app.get("/greet", tags=["health"])
async def greet_endpoint():
    return {"message": greet()}


@app.exception_handler(SazanError)
async def sazan_exception_handler(request: Request, exc: SazanError):
    """
    Map core errors that escaped a route to 400 responses.
    """
    logger.warning(f"Request failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Log errors no route handled and answer with a generic 500.
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal server error occurred"},
    )


@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    """
    Reject bodies over MAX_FILE_SIZE before they are read.

    A Content-Length that is not a plain decimal number is a bad request.
    """
    content_length = request.headers.get("content-length")
    if content_length is not None:
        if not content_length.isdecimal():
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": f"Invalid Content-Length header: {content_length!r}"},
            )
        if int(content_length) > MAX_FILE_SIZE:
            return JSONResponse(
                status_code=413,
                content={
                    "detail": f"Request body of {content_length} bytes exceeds "
                    f"the {MAX_FILE_SIZE} byte limit"
                },
            )
    return await call_next(request)


def start_api():
    """
    Start the API using uvicorn.

    This function is the entry point when running the API.
    """
    import uvicorn

    host = os.environ.get("SAZAN_API_HOST", "0.0.0.0")
    port = int(os.environ.get("SAZAN_API_PORT", 8000))

    logger.info(f"Starting Sazan API on {host}:{port}")
    uvicorn.run(
        "sazan.api.main:app",
        host=host,
        port=port,
        log_level="info",
    )


if __name__ == "__main__":
    start_api()
