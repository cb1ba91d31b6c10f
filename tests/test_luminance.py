import numpy as np
import pytest

from picture_ascii.errors import InvalidInput
from picture_ascii.luminance import PALETTE, glyph_for, glyph_row, luminance


def test_palette_layout():
    assert len(PALETTE) == 11
    assert PALETTE[0] == "#"
    assert PALETTE[5] == "="
    assert PALETTE[9] == PALETTE[10] == " "


def test_black_is_densest_glyph():
    assert luminance(0, 0, 0) == 0
    assert glyph_for(0, 0, 0) == "#"


def test_white_is_blank():
    assert luminance(255, 255, 255) >= 250
    assert glyph_for(255, 255, 255) == " "


def test_green_dominates_weighting():
    # 0.72 * 101 = 72.72
    assert luminance(0, 101, 0) == 72
    assert glyph_for(0, 101, 0) == "%"
    # same channel value in blue barely registers
    assert luminance(101, 0, 0) == 7


def test_channel_order_is_blue_green_red():
    assert luminance(200, 0, 0) == 14
    assert luminance(0, 0, 200) == 42


def test_sample_count_averages_sums():
    # nine pixels of green 101
    assert luminance(0, 909, 0, 9) == 72
    assert glyph_for(0, 909, 0, 9) == glyph_for(0, 101, 0)


def test_mid_grey_bucket():
    assert glyph_for(128, 128, 128) == "="
    assert glyph_for(128 * 9, 128 * 9, 128 * 9, 9) == "="


@pytest.mark.parametrize("args", [
    (0, 0, 0, 0),
    (0, 1000, 0, 1),
    (0, -101, 0, 1),
])
def test_out_of_range_raises(args):
    with pytest.raises(InvalidInput):
        luminance(*args)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        glyph_for(0, 0, 0, 0)


def test_darker_pixels_never_get_lighter_glyphs():
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(300, 3))
    ranked = sorted(pixels.tolist(), key=lambda p: 0.07 * p[0] + 0.72 * p[1] + 0.21 * p[2])
    indices = [PALETTE.index(glyph_for(*p)) for p in ranked]
    assert indices == sorted(indices)


def test_glyph_row_agrees_with_scalar():
    rng = np.random.default_rng(1)
    b, g, r = (rng.integers(0, 256, size=500) for _ in range(3))
    expected = "".join(glyph_for(int(x), int(y), int(z)) for x, y, z in zip(b, g, r))
    assert glyph_row(b, g, r) == expected


def test_glyph_row_agrees_with_scalar_for_window_sums():
    rng = np.random.default_rng(2)
    b, g, r = (rng.integers(0, 256 * 25, size=200) for _ in range(3))
    expected = "".join(glyph_for(int(x), int(y), int(z), 25) for x, y, z in zip(b, g, r))
    assert glyph_row(b, g, r, 25) == expected


def test_glyph_row_empty():
    empty = np.zeros(0, dtype=np.int64)
    assert glyph_row(empty, empty, empty) == ""


def test_glyph_row_rejects_out_of_range():
    big = np.array([0, 1000])
    zero = np.zeros(2, dtype=np.int64)
    with pytest.raises(InvalidInput):
        glyph_row(zero, big, zero)
    with pytest.raises(InvalidInput):
        glyph_row(zero, zero, zero, 0)
