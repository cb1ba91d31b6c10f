#!/usr/bin/env python3
# picture_ascii/conversion/converter.py
"""
Conversion dispatcher and worker orchestration.

- Common API: convert(image, compress, window_size) -> ConversionResult
- Modes register via Converter.register(name, backend); "plain" and
  "windowed" are always present.
- A backend provides plan(buffer, window_size) -> RowLayout, which validates
  before any worker starts, and fill(worker_id, worker_count, view, layout,
  rows, terminator), which writes only the rows striped to that worker.

Workers are spawned fresh per request and joined before it returns. Rows are
assembled by index, so output order never depends on completion order.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from picture_ascii.conversion.partition import parallelism
from picture_ascii.conversion.plain_mode import PlainConverter
from picture_ascii.conversion.result import ConversionResult, ResultCode
from picture_ascii.conversion.windowed_mode import WindowedConverter
from picture_ascii.errors import BadParametersError, InvalidImageError
from picture_ascii.pixels import as_pixel_buffer

__all__ = ["Converter", "convert"]

log = logging.getLogger(__name__)


@dataclass
class Converter:
    """
    Conversion strategy holder.
    `workers` of None or 0 sizes the pool to the machine's CPU count.
    """
    workers: Optional[int] = None
    timeout: Optional[float] = None
    line_terminator: str = os.linesep
    _backends: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.register("plain", PlainConverter())
        self.register("windowed", WindowedConverter())

    def register(self, mode: str, backend: Any) -> None:
        self._backends[mode] = backend

    def convert(self, image: Any, compress: bool = False, window_size: int = 3) -> ConversionResult:
        result = ConversionResult()
        try:
            buffer = as_pixel_buffer(image)
        except InvalidImageError as exc:
            log.warning("Rejected input image: %s", exc)
            return result.fail(ResultCode.BAD_INPUT)

        backend = self._backends["windowed" if compress else "plain"]
        try:
            layout = backend.plan(buffer, window_size)
        except BadParametersError as exc:
            log.warning("Rejected parameters: %s", exc)
            return result.fail(ResultCode.BAD_PARAMETERS)

        worker_count = parallelism(self.workers)
        log.debug(
            "Converting %dx%d image in %s mode: %d rows x %d cols, %d workers",
            buffer.width, buffer.height, backend.name, layout.rows, layout.columns, worker_count,
        )

        rows: List[Optional[str]] = [None] * layout.rows
        view = buffer.view()
        pool = ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="p2a-worker")
        finished = False
        try:
            futures = [
                pool.submit(backend.fill, wid, worker_count, view, layout, rows, self.line_terminator)
                for wid in range(worker_count)
            ]
            done, pending = wait(futures, timeout=self.timeout, return_when=FIRST_EXCEPTION)
            failed = [f for f in done if f.exception() is not None]
            if failed:
                for f in failed:
                    exc = f.exception()
                    log.error("Conversion worker failed", exc_info=(type(exc), exc, exc.__traceback__))
                return result.fail(ResultCode.UNEXPECTED_ERROR)
            if pending:
                log.error("Conversion timed out after %.2fs with %d workers running", self.timeout, len(pending))
                return result.fail(ResultCode.UNEXPECTED_ERROR)
            finished = True
        finally:
            # Running workers cannot be interrupted; on failure let them drain in the background.
            pool.shutdown(wait=finished, cancel_futures=True)

        if any(r is None for r in rows):
            log.error("Conversion left %d rows unfilled", rows.count(None))
            return result.fail(ResultCode.UNEXPECTED_ERROR)
        return result.succeed(rows)


def convert(
    image: Any,
    compress: bool = False,
    window_size: int = 3,
    *,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    line_terminator: str = os.linesep,
) -> ConversionResult:
    """
    Convert an image to ASCII art.

    compress=False maps every pixel to a glyph and ignores window_size.
    compress=True averages odd window_size x window_size blocks.
    Never raises for bad input; check result.status.
    """
    converter = Converter(workers=workers, timeout=timeout, line_terminator=line_terminator)
    return converter.convert(image, compress, window_size)
