import numpy as np
import pytest
from PIL import Image

from helpers import argb
from median_cut.core_types import Pixel
from median_cut.image_io import argb_to_image, argb_to_rgba_array, image_to_argb
from median_cut.palette_export import palette_image, palette_report, palette_to_rgba


def test_palette_to_rgba_keeps_order(registry):
    palette = [Pixel.of(0.0, 0.0, 1.0), Pixel.of(1.0, 0.0, 0.0)]
    out = palette_to_rgba(palette, registry["RGB"])
    assert out.tolist() == [argb(0, 0, 255), argb(255, 0, 0)]
    assert palette_to_rgba([], registry["RGB"]).size == 0


def test_palette_report_heaviest_first():
    palette = [Pixel.of(0, 0, 0, count=2), Pixel.of(1, 1, 1, count=9)]
    rgba = np.array([argb(0, 0, 0), argb(255, 255, 255)], dtype=np.uint32)
    assert palette_report(rgba, palette) == [("#ffffff", 9), ("#000000", 2)]


def test_swatch_grid_layout():
    colours = [argb(255, 0, 0), argb(0, 255, 0), argb(0, 0, 255)]
    im = palette_image(np.array(colours, dtype=np.uint32), cell_size=2)
    assert im.mode == "RGBA"
    assert im.size == (4, 4)
    px = np.array(im)
    assert tuple(px[0, 0]) == (255, 0, 0, 255)
    assert tuple(px[1, 3]) == (0, 255, 0, 255)
    assert tuple(px[3, 0]) == (0, 0, 255, 255)
    # fourth cell unused
    assert tuple(px[3, 3]) == (0, 0, 0, 0)


def test_swatch_square_palette_fills_every_cell():
    colours = np.array([argb(i, i, i) for i in range(9)], dtype=np.uint32)
    px = np.array(palette_image(colours))
    assert px.shape == (3, 3, 4)
    assert np.all(px[..., 3] == 255)


def test_swatch_rejects_bad_input():
    with pytest.raises(ValueError):
        palette_image(np.zeros((0,), dtype=np.uint32))
    with pytest.raises(ValueError):
        palette_image(np.array([argb(1, 2, 3)], dtype=np.uint32), cell_size=0)


def test_image_round_trip():
    arr = np.array(
        [[[255, 0, 0, 255], [0, 255, 0, 128]], [[0, 0, 255, 0], [10, 20, 30, 40]]],
        dtype=np.uint8,
    )
    grid = image_to_argb(Image.fromarray(arr))
    assert grid.dtype == np.uint32
    assert grid.shape == (2, 2)
    assert int(grid[0, 1]) == argb(0, 255, 0, 128)
    np.testing.assert_array_equal(argb_to_rgba_array(grid), arr)
    np.testing.assert_array_equal(np.array(argb_to_image(grid)), arr)


def test_rgb_image_becomes_opaque():
    im = Image.new("RGB", (3, 2), (1, 2, 3))
    grid = image_to_argb(im)
    assert grid.shape == (2, 3)
    assert np.all(grid == argb(1, 2, 3))


def test_swatch_rejects_empty_list():
    with pytest.raises(ValueError):
        palette_image([])
