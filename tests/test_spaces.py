import numpy as np
import pytest

from helpers import argb, colour_grid, max_channel_error
from median_cut.errors import UnknownColourSpaceError
from median_cut.spaces import SPACE_NAMES, lookup_space
from median_cut.spaces.oklab import (
    GAMUT_MAX_STEPS,
    GAMUT_STEP,
    GAMUT_TOLERANCE,
    gamut_map_oklab,
    oklab_to_normalized,
)


def test_registry_has_every_space(registry):
    assert set(registry) == set(SPACE_NAMES)


def test_lookup_is_case_insensitive(registry):
    assert lookup_space(registry, "hsl").name == "HSL"
    assert lookup_space(registry, " OkLab ").name == "OKLAB"


def test_lookup_unknown_space(registry):
    with pytest.raises(UnknownColourSpaceError):
        lookup_space(registry, "CMYK")


def test_only_hue_spaces_are_circular(registry):
    circular = {name for name, space in registry.items() if space.circular_hue}
    assert circular == {"HSL", "HSB"}
    assert registry["GRAYSCALE"].sort_by_intensity


@pytest.mark.parametrize("name", SPACE_NAMES)
def test_round_trip_within_one_step(registry, name):
    space = registry[name]
    src = colour_grid(step=15)
    back = space.to_packed_rgb(space.to_normalized(src))
    assert back.dtype == np.uint32
    assert back.shape == src.shape
    assert max_channel_error(src, back) <= 1


@pytest.mark.parametrize("name", SPACE_NAMES)
def test_packed_output_is_opaque(registry, name):
    space = registry[name]
    back = space.to_packed_rgb(space.to_normalized(colour_grid(step=51)))
    assert np.all((back >> np.uint32(24)) == 0xFF)


@pytest.mark.parametrize("name", SPACE_NAMES)
def test_alpha_does_not_change_channels(registry, name):
    space = registry[name]
    opaque = space.to_normalized(np.array([argb(10, 200, 30, 255)], dtype=np.uint32))
    clear = space.to_normalized(np.array([argb(10, 200, 30, 0)], dtype=np.uint32))
    np.testing.assert_array_equal(opaque, clear)


def test_scalar_input_gives_one_row(registry):
    rows = registry["RGB"].to_normalized(argb(255, 0, 51))
    assert rows.shape == (1, 3)
    np.testing.assert_allclose(rows[0], [1.0, 0.0, 0.2])


def test_hsl_known_values(registry):
    hsl = registry["HSL"].to_normalized(
        np.array([argb(255, 0, 0), argb(0, 255, 0), argb(128, 128, 128), argb(0, 0, 0)], dtype=np.uint32)
    )
    np.testing.assert_allclose(hsl[0], [0.0, 1.0, 0.5])
    np.testing.assert_allclose(hsl[1], [1.0 / 3.0, 1.0, 0.5])
    np.testing.assert_allclose(hsl[2], [0.0, 0.0, 128 / 255.0])
    np.testing.assert_allclose(hsl[3], [0.0, 0.0, 0.0])


def test_hsl_saturation_zero_at_extremes(registry):
    hsl = registry["HSL"].to_normalized(np.array([argb(255, 255, 255)], dtype=np.uint32))
    assert hsl[0, 1] == 0.0
    assert hsl[0, 2] == 1.0


def test_hsb_known_values(registry):
    hsb = registry["HSB"].to_normalized(
        np.array([argb(255, 0, 255), argb(0, 0, 255), argb(0, 0, 0)], dtype=np.uint32)
    )
    np.testing.assert_allclose(hsb[0], [5.0 / 6.0, 1.0, 1.0])
    np.testing.assert_allclose(hsb[1], [2.0 / 3.0, 1.0, 1.0])
    np.testing.assert_allclose(hsb[2], [0.0, 0.0, 0.0])


def test_hue_stays_below_one(registry):
    for name in ("HSL", "HSB"):
        rows = registry[name].to_normalized(colour_grid(step=5))
        assert np.all(rows[:, 0] >= 0.0)
        assert np.all(rows[:, 0] < 1.0)


def test_hue_wraps_on_inverse(registry):
    space = registry["HSB"]
    a = space.to_packed_rgb(np.array([[0.0, 1.0, 1.0]]))
    b = space.to_packed_rgb(np.array([[1.0, 1.0, 1.0]]))
    assert int(a[0]) == int(b[0]) == argb(255, 0, 0)


def test_oklab_white_and_black():
    lab = oklab_to_normalized(np.array([argb(255, 255, 255), argb(0, 0, 0)], dtype=np.uint32))
    np.testing.assert_allclose(lab[0], [1.0, 0.0, 0.0], atol=1e-4)
    np.testing.assert_allclose(lab[1], [0.0, 0.0, 0.0], atol=1e-9)


def test_oklab_in_gamut_keeps_full_chroma():
    lab = oklab_to_normalized(colour_grid(step=51))
    _linear, scale = gamut_map_oklab(lab)
    assert np.all(scale == 1.0)


def test_oklab_gamut_mapping_converges():
    wild = np.array(
        [
            [0.6, 0.5, 0.5],
            [0.8, -0.4, 0.3],
            [0.3, 0.1, -0.45],
        ]
    )
    linear, scale = gamut_map_oklab(wild)
    assert np.all(scale < 1.0)
    assert np.all(scale >= 0.0)
    assert np.all(linear >= -GAMUT_TOLERANCE)
    assert np.all(linear <= 1.0 + GAMUT_TOLERANCE)
    steps = (1.0 - scale) / GAMUT_STEP
    np.testing.assert_allclose(steps, np.round(steps), atol=1e-9)
    assert np.all(np.round(steps) <= GAMUT_MAX_STEPS)


def test_oklab_zero_chroma_is_last_resort():
    # lightness above white cannot fit at any chroma
    linear, scale = gamut_map_oklab(np.array([1.3, 0.2, 0.0]))
    assert scale[0] == 0.0
    np.testing.assert_allclose(linear[0], [1.3 ** 3] * 3, rtol=1e-6)


def test_oklab_out_of_gamut_packs_to_valid_colour(registry):
    packed = registry["OKLAB"].to_packed_rgb(np.array([[0.6, 0.5, 0.5], [1.3, 0.2, 0.0]]))
    assert packed.shape == (2,)
    assert int(packed[1]) == argb(255, 255, 255)
