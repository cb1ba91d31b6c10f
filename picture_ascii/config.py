#!/usr/bin/env python3
# picture_ascii/config.py
"""
Config loader/saver and defaults for Picture2ASCII.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from picture_ascii.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/picture_ascii/picture_ascii.json or OS-specific
    window = cfg["convert"]["window_size"]
    cfg["output"]["path"] = "art.txt"
    cfg.save()
"""

from __future__ import annotations

import json
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "convert": {
        "compress": True,                 # windowed mode, as the original driver ran
        "window_size": 3,                 # odd and > 1; checked by the converter
        "workers": 0,                     # 0 = one per CPU
        "timeout_s": None,                # seconds or None for no deadline
    },
    "output": {
        "path": "output.txt",
        "encoding": "utf-8",
        "line_terminator": "platform",    # platform | lf | crlf
    },
    "network": {
        "user_agent": "picture-ascii/1.0",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
        "retry_backoff_s": 0.3,
    },
    "ui": {
        "color": True,
        "theme": "auto",                  # auto | light | dark
    },
    "logging": {
        "level": "WARNING",
        "http_debug": False,
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

LINE_TERMINATORS: Dict[str, str] = {
    "platform": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "Picture2ASCII")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "Picture2ASCII")
    return os.path.join(os.path.expanduser("~/.config"), "picture_ascii")

def _default_config_path() -> str:
    """Resolve default config path, honoring PICTURE_ASCII_CONFIG env override."""
    env = os.environ.get("PICTURE_ASCII_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "picture_ascii.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return float(default)

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return int(default)

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(json.loads(json.dumps(DEFAULT_CONFIG)), cfg or {})

    # convert
    cv = c["convert"]
    cv["compress"] = _coerce_bool(cv.get("compress"), DEFAULT_CONFIG["convert"]["compress"])
    # Parity is left alone so a bad size reaches the converter as BAD_PARAMETERS.
    cv["window_size"] = _coerce_int(cv.get("window_size"), DEFAULT_CONFIG["convert"]["window_size"])
    cv["workers"] = _coerce_int(cv.get("workers"), 0, (0, 1024))
    t = cv.get("timeout_s")
    cv["timeout_s"] = None if t is None else _coerce_num(t, 60.0, (0.01, 86400.0))

    # output
    o = c["output"]
    o["path"] = str(o.get("path") or DEFAULT_CONFIG["output"]["path"])
    o["encoding"] = str(o.get("encoding") or DEFAULT_CONFIG["output"]["encoding"])
    if o.get("line_terminator") not in LINE_TERMINATORS:
        o["line_terminator"] = DEFAULT_CONFIG["output"]["line_terminator"]

    # network
    n = c["network"]
    n["user_agent"] = str(n.get("user_agent") or DEFAULT_CONFIG["network"]["user_agent"])
    n["connect_timeout_s"] = _coerce_num(n.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    n["read_timeout_s"]    = _coerce_num(n.get("read_timeout_s"), 15.0, (0.5, 120.0))
    n["retries"]           = _coerce_int(n.get("retries"), 3, (0, 10))
    n["retry_backoff_s"]   = _coerce_num(n.get("retry_backoff_s"), 0.3, (0.0, 10.0))

    # ui
    ui = c["ui"]
    ui["color"] = _coerce_bool(ui.get("color"), DEFAULT_CONFIG["ui"]["color"])
    if ui.get("theme") not in ("auto", "light", "dark"):
        ui["theme"] = DEFAULT_CONFIG["ui"]["theme"]

    # logging
    lg = c["logging"]
    if lg.get("level") not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        lg["level"] = DEFAULT_CONFIG["logging"]["level"]
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = True) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("config root must be an object")
        except (OSError, ValueError):
            # Corrupt file. Backup and regenerate.
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                pass
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def line_terminator(self) -> str:
        return LINE_TERMINATORS[self.data["output"]["line_terminator"]]

    @property
    def output_path(self) -> str:
        return self.data["output"]["path"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "LINE_TERMINATORS",
    "_default_config_path",
]
