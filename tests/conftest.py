"""
Shared fixtures for the Sazan tests.
"""

import pytest

from tests.helpers import BLUE, GREEN, RED, WHITE, make_pattern_image, make_solid_image


@pytest.fixture
def pattern_images():
    """Four 120x110 pattern images."""
    return [make_pattern_image(120, 110, seed) for seed in range(4)]


@pytest.fixture
def solid_images():
    """Four 100x100 solid images: red, green, blue, white."""
    return [make_solid_image(100, 100, color) for color in (RED, GREEN, BLUE, WHITE)]
