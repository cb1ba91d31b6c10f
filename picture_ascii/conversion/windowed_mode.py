#!/usr/bin/env python3
# picture_ascii/conversion/windowed_mode.py
"""
Windowed ("compression") converter.

Each glyph averages a square window x window block of pixels. Output row j
reads input rows j*window .. j*window + window - 1. Windows are laid from the
top-left corner; trailing rows and columns that do not fill a whole window
are dropped, never padded.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from picture_ascii.conversion.partition import RowLayout, rows_for_worker
from picture_ascii.errors import BadParametersError
from picture_ascii.luminance import glyph_row
from picture_ascii.pixels import CHANNELS, PixelBuffer


class WindowedConverter:
    name = "windowed"

    def plan(self, buffer: PixelBuffer, window_size: int) -> RowLayout:
        if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
            raise BadParametersError(f"window size must be an integer, got {window_size!r}")
        # Odd sizes only: a window keeps a centre pixel.
        if window_size <= 1 or window_size % 2 == 0:
            raise BadParametersError(f"window size must be odd and > 1, got {window_size}")
        window_size = int(window_size)
        rows = buffer.height // window_size
        columns = buffer.width // window_size
        if rows <= 0 or columns <= 0:
            raise BadParametersError(
                f"{buffer.width}x{buffer.height} image is smaller than a {window_size}px window"
            )
        return RowLayout(rows=rows, columns=columns, window=window_size)

    def fill(
        self,
        worker_id: int,
        worker_count: int,
        view: np.ndarray,
        layout: RowLayout,
        rows: List[Optional[str]],
        terminator: str,
    ) -> None:
        k = layout.window
        clipped_width = layout.columns * k
        for j in rows_for_worker(worker_id, worker_count, layout.rows):
            band = view[j * k:(j + 1) * k, :clipped_width]
            # (k, columns*k, 3) -> (k, columns, k, 3), summed per window
            sums = band.reshape(k, layout.columns, k, CHANNELS).sum(axis=(0, 2), dtype=np.int64)
            rows[j] = glyph_row(sums[:, 0], sums[:, 1], sums[:, 2], layout.samples) + terminator
