#!/usr/bin/env python3
# picture_ascii/source.py
"""
Image loading for the command line driver.

Local paths are opened directly with Pillow. http(s) locations go through a
requests Session with urllib3 Retry, so transient 429/5xx answers are retried
with backoff before the load is given up.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from PIL import Image, UnidentifiedImageError

from picture_ascii.errors import InvalidImageError

__all__ = ["make_session", "load_image", "is_url"]

log = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def make_session(user_agent: str, retries: int = 3, backoff: float = 0.3) -> requests.Session:
    """HTTP session with retry for image downloads."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _decode(raw: Union[io.BytesIO, Path], label: str) -> Image.Image:
    try:
        img = Image.open(raw)
        img.load()
    except UnidentifiedImageError as exc:
        raise InvalidImageError(f"not an image: {label}") from exc
    except (OSError, SyntaxError) as exc:
        # truncated or corrupt files surface as OSError from load()
        raise InvalidImageError(f"cannot decode {label}: {exc}") from exc
    return img


def load_image(
    location: Union[str, Path],
    session: Optional[requests.Session] = None,
    timeout: Tuple[float, float] = (5.0, 15.0),
) -> Image.Image:
    """
    Load an image from a local path or http(s) URL.
    Raises FileNotFoundError, InvalidImageError or requests.RequestException.
    """
    loc = str(location)
    if is_url(loc):
        sess = session or make_session("picture-ascii")
        log.debug("Fetching %s", loc)
        r = sess.get(loc, timeout=timeout)
        r.raise_for_status()
        if not r.content:
            raise InvalidImageError(f"empty response from {loc}")
        return _decode(io.BytesIO(r.content), loc)

    path = Path(loc).expanduser()
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    log.debug("Opening %s", path)
    return _decode(path, str(path))
