from median_cut.core_types import Pixel
from median_cut.sorter import active_channels, sort_pixels


def _px(a, b, c, tag=1):
    # count doubles as a tag so stability can be observed
    return Pixel.of(a, b, c, count=tag)


def test_active_channels_drops_none():
    assert active_channels((None, 2, None, 0)) == [2, 0]
    assert active_channels(()) == []


def test_sort_by_single_channel(registry):
    pixels = [_px(0.9, 0.0, 0.0), _px(0.1, 0.5, 0.5), _px(0.5, 1.0, 0.0)]
    out = sort_pixels(pixels, registry["RGB"], (0, None, None))
    assert out is pixels
    assert [p.values[0] for p in pixels] == [0.1, 0.5, 0.9]


def test_sort_is_stable_for_equal_keys(registry):
    pixels = [_px(0.5, 0.9, 0.0, 1), _px(0.2, 0.0, 0.0, 2), _px(0.5, 0.1, 0.0, 3)]
    sort_pixels(pixels, registry["RGB"], (0,))
    assert [p.count for p in pixels] == [2, 1, 3]


def test_multi_channel_priority(registry):
    pixels = [
        _px(0.5, 0.9, 0.3),
        _px(0.5, 0.1, 0.7),
        _px(0.2, 0.9, 0.1),
        _px(0.5, 0.1, 0.2),
    ]
    sort_pixels(pixels, registry["HSL"], (0, 1, 2))
    assert [p.values for p in pixels] == [
        (0.2, 0.9, 0.1),
        (0.5, 0.1, 0.2),
        (0.5, 0.1, 0.7),
        (0.5, 0.9, 0.3),
    ]


def test_priority_order_matters(registry):
    pixels = [_px(0.1, 0.9, 0.0), _px(0.9, 0.1, 0.0)]
    sort_pixels(pixels, registry["RGB"], (1, 0))
    assert pixels[0].values[1] == 0.1


def test_none_entries_are_skipped(registry):
    pixels = [_px(0.0, 0.8, 0.0), _px(0.0, 0.2, 0.0)]
    sort_pixels(pixels, registry["RGB"], (None, 1, None))
    assert [p.values[1] for p in pixels] == [0.2, 0.8]


def test_grayscale_sorts_by_intensity(registry):
    pixels = [_px(1.0, 0.0, 0.0), _px(0.3, 0.3, 0.3), _px(0.0, 0.0, 0.2)]
    sort_pixels(pixels, registry["GRAYSCALE"], (0,))
    assert [p.values for p in pixels] == [
        (0.0, 0.0, 0.2),
        (0.3, 0.3, 0.3),
        (1.0, 0.0, 0.0),
    ]


def test_no_active_channels_keeps_order(registry):
    pixels = [_px(0.9, 0.0, 0.0), _px(0.1, 0.0, 0.0)]
    sort_pixels(pixels, registry["RGB"], (None, None, None))
    assert [p.values[0] for p in pixels] == [0.9, 0.1]


def test_empty_list(registry):
    assert sort_pixels([], registry["OKLAB"], (0,)) == []
