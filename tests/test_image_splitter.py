import io
import zipfile

import pytest
from PIL import Image

from sazan import tile_to_archive
from sazan.exceptions import BoundsError, EncodeError
from sazan.export import image_splitter
from sazan.export.image_splitter import (
    crop_and_split_images,
    iter_tile_rectangles,
    split_image_to_tiles,
    tile_filename,
)
from sazan.geometry import Rectangle
from tests.helpers import make_pattern_image, read_archive


def test_tile_filename_is_zero_padded():
    assert tile_filename("t", 0, 1, 2) == "t_00_01_02.png"
    assert tile_filename("tile", 12, 3, 45) == "tile_12_03_45.png"


def test_iter_tile_rectangles_row_major():
    rects = list(iter_tile_rectangles((10, 20), (5, 7), 2, 2))
    assert rects == [
        (0, 0, Rectangle(10, 20, 5, 7)),
        (0, 1, Rectangle(10, 20, 15, 7)),
        (1, 0, Rectangle(10, 20, 5, 27)),
        (1, 1, Rectangle(10, 20, 15, 27)),
    ]


def test_single_image_two_by_two_archive():
    image = make_pattern_image(100, 100)

    data = tile_to_archive([image], (50, 50), (0, 0), 2, 2, "t")
    tiles = read_archive(data)

    assert list(tiles) == [
        "t_00_00_00.png",
        "t_00_00_01.png",
        "t_00_01_00.png",
        "t_00_01_01.png",
    ]
    for tile in tiles.values():
        assert tile.size == (50, 50)


def test_archive_entry_count_and_order(pattern_images):
    data = crop_and_split_images(pattern_images, (30, 25), (0, 0), 3, 2, "x")

    with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
        names = zip_file.namelist()
        infos = zip_file.infolist()

    assert len(names) == len(pattern_images) * 3 * 2
    assert len(set(names)) == len(names)
    expected = [
        tile_filename("x", i, row, col)
        for i in range(len(pattern_images))
        for row in range(2)
        for col in range(3)
    ]
    assert names == expected
    assert all(info.compress_type == zipfile.ZIP_STORED for info in infos)


def test_tiles_reconstruct_source_region():
    image = make_pattern_image(90, 80, seed=5)
    tile_size, offset, cols, rows = (20, 15), (7, 11), 4, 3

    tiles = read_archive(crop_and_split_images([image], tile_size, offset, cols, rows, "r"))

    canvas = Image.new("RGBA", (cols * tile_size[0], rows * tile_size[1]))
    for row in range(rows):
        for col in range(cols):
            tile = tiles[tile_filename("r", 0, row, col)]
            canvas.paste(tile, (col * tile_size[0], row * tile_size[1]))

    region = image.crop(
        (offset[0], offset[1], offset[0] + cols * tile_size[0], offset[1] + rows * tile_size[1])
    )
    assert canvas.tobytes() == region.tobytes()


def test_archive_is_deterministic(pattern_images):
    first = crop_and_split_images(pattern_images, (10, 10), (2, 2), 2, 2, "d")
    second = crop_and_split_images(pattern_images, (10, 10), (2, 2), 2, 2, "d")
    assert first == second


def test_out_of_bounds_tile_aborts():
    images = [make_pattern_image(100, 100), make_pattern_image(60, 60)]
    with pytest.raises(BoundsError):
        crop_and_split_images(images, (50, 50), (0, 0), 2, 2, "t")


def test_offset_pushing_tiles_out_of_bounds_aborts():
    image = make_pattern_image(100, 100)
    with pytest.raises(BoundsError):
        crop_and_split_images([image], (50, 50), (1, 0), 2, 1, "t")


def test_encode_failure_aborts(monkeypatch):
    def failing_encode(image):
        raise EncodeError("boom")

    monkeypatch.setattr(image_splitter, "encode_png", failing_encode)
    with pytest.raises(EncodeError):
        crop_and_split_images([make_pattern_image(20, 20)], (10, 10), (0, 0), 2, 2, "t")


def test_empty_input_gives_empty_archive():
    data = crop_and_split_images([], (10, 10), (0, 0), 2, 2, "t")
    with zipfile.ZipFile(io.BytesIO(data)) as zip_file:
        assert zip_file.namelist() == []


def test_split_image_to_tiles_returns_positions():
    image = make_pattern_image(40, 40)
    tiles = split_image_to_tiles(image, (20, 20), (0, 0), 2, 2)
    assert [(row, col) for row, col, _ in tiles] == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert tiles[3][2].tobytes() == image.crop((20, 20, 40, 40)).tobytes()


@pytest.mark.parametrize("prefix", ["../../evil", "a/b", "", "tile\n"])
def test_prefix_with_path_characters_is_rejected(prefix):
    with pytest.raises(ValueError, match="Invalid tile prefix"):
        crop_and_split_images([make_pattern_image(20, 20)], (10, 10), (0, 0), 1, 1, prefix)
