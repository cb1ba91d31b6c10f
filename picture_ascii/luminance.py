#!/usr/bin/env python3
# picture_ascii/luminance.py
"""
Luminance to glyph mapping.

Channel sums arrive in buffer order (blue, green, red). The weighted value
is truncated, divided by the sample count and bucketed by 25 into PALETTE.
glyph_row() is the numpy form used by the row converters; it evaluates the
same float expression in the same order so both agree glyph for glyph.
"""

from __future__ import annotations

import numpy as np

from picture_ascii.errors import InvalidInput

__all__ = [
    "PALETTE",
    "BUCKET",
    "luminance",
    "glyph_for",
    "glyph_row",
]

# Darkest first. The trailing blank covers L == 250..255 (255 // 25 == 10).
PALETTE = ("#", "@", "%", "+", "*", "=", ":", "-", ".", " ", " ")
BUCKET = 25

BLUE_WEIGHT = 0.07
GREEN_WEIGHT = 0.72
RED_WEIGHT = 0.21

_GLYPHS = np.array(PALETTE)


def luminance(blue_sum: int, green_sum: int, red_sum: int, sample_count: int = 1) -> int:
    """Return the averaged grey value (0..255) of `sample_count` pixels."""
    if sample_count < 1:
        raise InvalidInput(f"sample_count must be >= 1, got {sample_count}")
    value = int(BLUE_WEIGHT * blue_sum + GREEN_WEIGHT * green_sum + RED_WEIGHT * red_sum) // sample_count
    if not 0 <= value <= 255:
        raise InvalidInput(f"luminance {value} outside 0..255")
    return value


def glyph_for(blue_sum: int, green_sum: int, red_sum: int, sample_count: int = 1) -> str:
    return PALETTE[luminance(blue_sum, green_sum, red_sum, sample_count) // BUCKET]


def glyph_row(
    blue: np.ndarray,
    green: np.ndarray,
    red: np.ndarray,
    sample_count: int = 1,
) -> str:
    """
    Map equal-length arrays of channel sums to one string of glyphs.
    Raises InvalidInput on the same conditions as luminance().
    """
    if sample_count < 1:
        raise InvalidInput(f"sample_count must be >= 1, got {sample_count}")
    weighted = BLUE_WEIGHT * blue.astype(np.float64) + GREEN_WEIGHT * green + RED_WEIGHT * red
    lum = weighted.astype(np.int64) // sample_count
    if lum.size and (lum.min() < 0 or lum.max() > 255):
        raise InvalidInput(f"luminance outside 0..255 (min {lum.min()}, max {lum.max()})")
    return "".join(_GLYPHS[lum // BUCKET].tolist())
