#!/usr/bin/env python3
# picture_ascii/pixels.py
"""
Canonical pixel buffer and the normalization step that produces it.

The core reads one layout only: 3 bytes per pixel, blue/green/red, no alpha,
row-major with stride = width * 3. Anything else is brought into that layout
here before a conversion starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from PIL import Image

from picture_ascii.errors import InvalidImageError

__all__ = [
    "CHANNELS",
    "PixelBuffer",
    "as_pixel_buffer",
]

CHANNELS = 3


def _flatten_alpha(img: Image.Image) -> Image.Image:
    """Composite an image with transparency over an opaque black canvas."""
    rgba = img.convert("RGBA")
    base = Image.new("RGB", rgba.size, (0, 0, 0))
    base.paste(rgba, mask=rgba.getchannel("A"))
    return base


@dataclass(frozen=True)
class PixelBuffer:
    """Immutable BGR byte buffer shared read-only by all workers."""
    data: bytes
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidImageError(f"negative dimensions {self.width}x{self.height}")
        expected = self.height * self.stride
        if len(self.data) != expected:
            raise InvalidImageError(
                f"buffer holds {len(self.data)} bytes, {self.width}x{self.height} needs {expected}"
            )

    @property
    def stride(self) -> int:
        return self.width * CHANNELS

    def view(self) -> np.ndarray:
        """(height, width, 3) uint8 view over the bytes. Read-only."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    # --- Constructors

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        try:
            if "A" in img.getbands() or "transparency" in img.info:
                img = _flatten_alpha(img)
            elif img.mode != "RGB":
                img = img.convert("RGB")
            data = img.tobytes("raw", "BGR")
        except (OSError, ValueError) as exc:
            raise InvalidImageError(f"cannot normalize {img.mode} image: {exc}") from exc
        return cls(data, img.width, img.height)

    @classmethod
    def from_array(cls, arr: np.ndarray, order: str = "RGB") -> "PixelBuffer":
        """Build from an (H, W, 3) uint8 array in RGB or BGR channel order."""
        if order not in ("RGB", "BGR"):
            raise InvalidImageError(f"unsupported channel order {order!r}")
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidImageError(f"expected (H, W, 3) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise InvalidImageError(f"expected uint8 array, got {arr.dtype}")
        if order == "RGB":
            arr = arr[..., ::-1]
        h, w = arr.shape[:2]
        return cls(np.ascontiguousarray(arr).tobytes(), w, h)


def as_pixel_buffer(image: Any) -> PixelBuffer:
    """Normalize a Pillow image, numpy array or PixelBuffer."""
    if isinstance(image, PixelBuffer):
        return image
    if isinstance(image, Image.Image):
        return PixelBuffer.from_image(image)
    if isinstance(image, np.ndarray):
        return PixelBuffer.from_array(image)
    raise InvalidImageError(f"unsupported image type {type(image).__name__}")
