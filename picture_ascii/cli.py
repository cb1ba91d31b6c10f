#!/usr/bin/env python3
# picture_ascii/cli.py
"""
Entry point for Picture2ASCII.
Asks for an image (path or URL), converts it and writes the art to a file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import requests
from prompt_toolkit import prompt
from prompt_toolkit.completion import PathCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.shortcuts import print_formatted_text

from picture_ascii.config import Config
from picture_ascii.conversion.converter import Converter
from picture_ascii.conversion.result import ConversionResult, ResultCode
from picture_ascii.errors import InvalidImageError
from picture_ascii.logging_conf import setup_logging
from picture_ascii.source import is_url, load_image, make_session
from picture_ascii.styles import make_style
from picture_ascii.version import version_info

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picture-ascii",
        description="Convert an image to ASCII art and write it to a text file.",
    )
    parser.add_argument("image", nargs="?", help="Image path or http(s) URL. Asked for when omitted.")
    parser.add_argument("--plain", action="store_true", help="One glyph per pixel, no block averaging.")
    parser.add_argument("--window", type=int, default=None, help="Odd window side for block averaging.")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count).")
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds.")
    parser.add_argument("-o", "--output", default=None, help="Output text file.")
    parser.add_argument("--config", default=None, help="Config file path.")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


class _Console:
    """Prints styled messages on a terminal, plain text elsewhere."""

    def __init__(self, cfg: Config):
        self.styled = bool(cfg["ui"].get("color")) and sys.stdout.isatty()
        self.style = make_style(cfg)

    def say(self, cls: str, text: str) -> None:
        if self.styled:
            print_formatted_text(FormattedText([(f"class:{cls}", text)]), style=self.style)
        else:
            print(text)

    def ask_filename(self) -> str:
        if sys.stdin.isatty():
            return prompt(
                [("class:prompt", "Please, introduce the image filename: ")],
                completer=PathCompleter(expanduser=True),
                style=self.style,
            ).strip()
        print("Please, introduce the image filename:")
        return sys.stdin.readline().strip()


def _apply_overrides(cfg: Config, args: argparse.Namespace) -> None:
    partial = {"convert": {}, "output": {}}
    if args.plain:
        partial["convert"]["compress"] = False
    if args.window is not None:
        partial["convert"]["window_size"] = args.window
    if args.workers is not None:
        partial["convert"]["workers"] = args.workers
    if args.timeout is not None:
        partial["convert"]["timeout_s"] = args.timeout
    if args.output:
        partial["output"]["path"] = args.output
    cfg.update(partial)


def _write_output(cfg: Config, result: ConversionResult) -> None:
    # newline="" keeps the converter's line terminators byte for byte
    with open(cfg.output_path, "w", encoding=cfg["output"]["encoding"], newline="") as f:
        f.write(result.data)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = Config.load(args.config)
    _apply_overrides(cfg, args)
    setup_logging(cfg)
    console = _Console(cfg)

    location = args.image or console.ask_filename()
    if not location:
        console.say("error", "No image given.")
        return int(ResultCode.BAD_INPUT)

    net = cfg["network"]
    try:
        session = make_session(net["user_agent"], net["retries"], net["retry_backoff_s"]) if is_url(location) else None
        image = load_image(location, session, timeout=(net["connect_timeout_s"], net["read_timeout_s"]))
    except (OSError, InvalidImageError, requests.RequestException) as exc:
        log.error("Could not load %s: %s", location, exc)
        console.say("error", f"Could not load image: {exc}")
        return int(ResultCode.BAD_INPUT)

    cv = cfg["convert"]
    converter = Converter(
        workers=cv["workers"],
        timeout=cv["timeout_s"],
        line_terminator=cfg.line_terminator,
    )
    result = converter.convert(image, cv["compress"], cv["window_size"])
    if not result.ok:
        console.say("error", f"Conversion failed ({result.status.name}).")
        return int(result.status)

    try:
        _write_output(cfg, result)
    except OSError as exc:
        log.error("Could not write %s: %s", cfg.output_path, exc)
        console.say("error", f"Could not write {cfg.output_path}: {exc}")
        return int(ResultCode.UNEXPECTED_ERROR)

    log.info("Wrote %d rows to %s", len(result.rows), cfg.output_path)
    console.say("ok", "Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
