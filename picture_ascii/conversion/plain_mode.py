#!/usr/bin/env python3
# picture_ascii/conversion/plain_mode.py
"""
Plain converter: one glyph per pixel, one output row per image row.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from picture_ascii.conversion.partition import RowLayout, rows_for_worker
from picture_ascii.luminance import glyph_row
from picture_ascii.pixels import PixelBuffer


class PlainConverter:
    name = "plain"

    def plan(self, buffer: PixelBuffer, window_size: int = 1) -> RowLayout:
        # window_size is ignored in plain mode
        return RowLayout(rows=buffer.height, columns=buffer.width)

    def fill(
        self,
        worker_id: int,
        worker_count: int,
        view: np.ndarray,
        layout: RowLayout,
        rows: List[Optional[str]],
        terminator: str,
    ) -> None:
        for y in rows_for_worker(worker_id, worker_count, layout.rows):
            px = view[y].astype(np.int64)
            rows[y] = glyph_row(px[:, 0], px[:, 1], px[:, 2]) + terminator
