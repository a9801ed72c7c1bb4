"""
API Configuration settings.
"""

import os

# Maximum allowed request size in bytes (e.g., 100MB)
MAX_FILE_SIZE = 100 * 1024 * 1024

# Maximum number of pixels in a composed grid image
MAX_OUTPUT_PIXELS = 100_000_000

# Default filename prefix for tiles in split archives
DEFAULT_TILE_PREFIX = "tile"

# Allowed CORS origins, comma separated ("*" for any)
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
