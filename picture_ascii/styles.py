#!/usr/bin/env python3
# picture_ascii/styles.py
"""
Style definitions for Picture2ASCII terminal messages.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style
from picture_ascii.config import Config

def make_style(cfg: Config) -> Style:
    theme = cfg["ui"].get("theme", "auto")

    base_dark = {
        "prompt": "#00afff bold",
        "ok": "#00ff00 bold",
        "error": "#ff5f5f bold",
        "path": "#ffffff underline",
    }
    base_light = {
        "prompt": "#005f87 bold",
        "ok": "#006600 bold",
        "error": "#af0000 bold",
        "path": "#000000 underline",
    }

    if theme == "light":
        return Style.from_dict(base_light)
    if theme == "dark":
        return Style.from_dict(base_dark)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(base_light)
    return Style.from_dict(base_dark)
