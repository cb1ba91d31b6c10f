#!/usr/bin/env python3
# picture_ascii/conversion/partition.py
"""
Row striping shared by the converters.

Worker `id` owns output rows id, id + n, id + 2n, ... for n workers. The
partition is static, so each output slot is written by exactly one worker
and no locking is needed before the final join.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

__all__ = ["RowLayout", "parallelism", "rows_for_worker", "row_owner"]


@dataclass(frozen=True)
class RowLayout:
    """Output geometry decided before any worker starts."""
    rows: int                # logical output rows
    columns: int             # glyphs per output row
    window: int = 1          # square sampling side, 1 for plain mode

    @property
    def samples(self) -> int:
        return self.window * self.window


def parallelism(requested: Optional[int] = None) -> int:
    """Worker count: an explicit positive request, else the CPU count."""
    if requested:
        return max(1, int(requested))
    return os.cpu_count() or 1


def rows_for_worker(worker_id: int, worker_count: int, row_count: int) -> range:
    return range(worker_id, row_count, worker_count)


def row_owner(row: int, worker_count: int) -> int:
    return row % worker_count
