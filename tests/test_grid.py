import pytest
from PIL import Image

from sazan import compose_grid
from sazan.exceptions import BoundsError, SizeMismatchError
from sazan.geometry import Rectangle
from sazan.processing.grid import combine_grid, crop_and_grid_images
from tests.helpers import BLUE, GREEN, RED, WHITE, make_solid_image

TRANSPARENT = (0, 0, 0, 0)


def test_four_images_fill_two_by_two_grid(solid_images):
    result = crop_and_grid_images(solid_images, Rectangle(100, 100, 0, 0), 2, 2)

    assert result.size == (200, 200)
    assert result.mode == "RGBA"
    assert result.getpixel((0, 0)) == RED
    assert result.getpixel((150, 50)) == GREEN
    assert result.getpixel((50, 150)) == BLUE
    assert result.getpixel((199, 199)) == WHITE


def test_quadrants_match_source_crops(pattern_images):
    rect = Rectangle(40, 30, 10, 20)
    result = crop_and_grid_images(pattern_images, rect, 2, 2)

    assert result.size == (80, 60)
    for i, source in enumerate(pattern_images):
        x, y = (i % 2) * 40, (i // 2) * 30
        quadrant = result.crop((x, y, x + 40, y + 30))
        assert quadrant.tobytes() == source.crop(rect.box).tobytes()


def test_full_grid_has_no_transparent_cells(solid_images):
    result = combine_grid(solid_images, 4, 1)
    assert result.size == (400, 100)
    alpha = result.getchannel("A")
    assert alpha.getextrema() == (255, 255)


def test_missing_cells_are_transparent(solid_images):
    result = combine_grid(solid_images[:3], 2, 2)

    assert result.size == (200, 200)
    assert result.getpixel((50, 150)) == BLUE
    last_cell = result.crop((100, 100, 200, 200))
    assert last_cell.getextrema() == ((0, 0), (0, 0), (0, 0), (0, 0))


def test_filler_cells_follow_last_image_in_row_major_order(solid_images):
    result = combine_grid(solid_images[:1], 3, 2)

    assert result.size == (300, 200)
    assert result.getpixel((50, 50)) == RED
    for x, y in [(150, 50), (250, 50), (50, 150), (150, 150), (250, 150)]:
        assert result.getpixel((x, y)) == TRANSPARENT


def test_empty_input_gives_one_pixel_cells():
    result = combine_grid([], 3, 2)

    assert result.size == (3, 2)
    assert result.getextrema() == ((0, 0), (0, 0), (0, 0), (0, 0))


def test_empty_input_through_crop_and_grid():
    result = compose_grid([], Rectangle(100, 100, 0, 0), 2, 2)
    assert result.size == (2, 2)


def test_extra_images_are_ignored(solid_images):
    result = combine_grid(solid_images, 1, 2)
    assert result.size == (100, 200)
    assert result.getpixel((50, 50)) == RED
    assert result.getpixel((50, 150)) == GREEN


def test_mismatched_sizes_raise():
    images = [make_solid_image(10, 10, RED), make_solid_image(12, 10, GREEN)]
    with pytest.raises(SizeMismatchError):
        combine_grid(images, 2, 1)


def test_alpha_is_copied_not_blended():
    half = (10, 20, 30, 128)
    result = combine_grid([make_solid_image(4, 4, half)], 1, 1)
    assert result.getpixel((0, 0)) == half


def test_rgb_input_is_converted():
    rgb = Image.new("RGB", (5, 5), (1, 2, 3))
    result = combine_grid([rgb], 1, 1)
    assert result.getpixel((2, 2)) == (1, 2, 3, 255)


def test_inputs_are_not_modified(solid_images):
    before = [img.tobytes() for img in solid_images]
    crop_and_grid_images(solid_images, Rectangle(50, 50, 25, 25), 3, 3)
    assert [img.tobytes() for img in solid_images] == before


@pytest.mark.parametrize("cols, rows", [(0, 1), (1, 0), (-1, 2)])
def test_non_positive_grid_raises(solid_images, cols, rows):
    with pytest.raises(ValueError):
        combine_grid(solid_images, cols, rows)


def test_crop_out_of_bounds_aborts_composition(solid_images):
    with pytest.raises(BoundsError):
        crop_and_grid_images(solid_images, Rectangle(100, 100, 1, 0), 2, 2)
