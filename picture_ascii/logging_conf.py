#!/usr/bin/env python3
# picture_ascii/logging_conf.py
"""
Central logging setup for Picture2ASCII.
Supports console and optional rotating file logs.
"""

import logging
from logging.handlers import RotatingFileHandler
from picture_ascii.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(cfg: Config) -> None:
    level_name = cfg["logging"].get("level", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    if cfg["logging"].get("http_debug"):
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logging.getLogger("requests").setLevel(logging.DEBUG)
