#!/usr/bin/env python3
# picture_ascii/errors.py
"""
Exceptions raised inside the conversion core.
convert() maps them to ResultCode values; nothing here escapes that boundary.
"""

__all__ = [
    "ConversionError",
    "InvalidImageError",
    "BadParametersError",
    "InvalidInput",
]


class ConversionError(Exception):
    """Base class for conversion failures."""


class InvalidImageError(ConversionError):
    """Source image could not be normalized to a 3-byte BGR buffer."""


class BadParametersError(ConversionError):
    """Window size unusable, or image smaller than one window."""


class InvalidInput(ConversionError, ValueError):
    """Channel sums outside what byte data can produce."""
