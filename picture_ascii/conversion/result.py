#!/usr/bin/env python3
# picture_ascii/conversion/result.py
"""Outcome of a conversion request: status code plus assembled text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

__all__ = ["ResultCode", "ConversionResult"]


class ResultCode(IntEnum):
    NOT_DONE = 0
    OK = 1
    BAD_INPUT = 2
    BAD_PARAMETERS = 3
    UNEXPECTED_ERROR = 4


@dataclass
class ConversionResult:
    """
    Created pending (NOT_DONE), finalized exactly once by the converter.
    `rows` keeps each output row with its line terminator; `data` is their
    concatenation in row order.
    """
    status: ResultCode = ResultCode.NOT_DONE
    data: str = ""
    rows: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == ResultCode.OK

    @property
    def lines(self) -> Tuple[str, ...]:
        """Rows without their line terminators."""
        return tuple(r.rstrip("\r\n") for r in self.rows)

    def _check_pending(self) -> None:
        if self.status != ResultCode.NOT_DONE:
            raise RuntimeError(f"result already finalized as {self.status.name}")

    def succeed(self, rows: Sequence[str]) -> "ConversionResult":
        self._check_pending()
        self.rows = tuple(rows)
        self.data = "".join(self.rows)
        self.status = ResultCode.OK
        return self

    def fail(self, status: ResultCode) -> "ConversionResult":
        self._check_pending()
        if status in (ResultCode.NOT_DONE, ResultCode.OK):
            raise ValueError(f"{status.name} is not a failure status")
        self.status = status
        return self
