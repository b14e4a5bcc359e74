# src/jquery_builder/minify.py

import re
from pathlib import Path

import rjsmin

from .utils import get_timestamp
from .utils_logs import get_logger


RE_LIBRARY_VERSION = re.compile(r"jQuery JavaScript Library v(\S+)")


def min_filename(filename: str) -> str:
    """``jquery.slim.js`` → ``jquery.slim.min.js``"""
    return re.sub(r"\.js$", ".min.js", filename)


def make_banner(source: str) -> str:
    """Short license banner for the minified file, or "" without a version."""
    match = RE_LIBRARY_VERSION.search(source)
    if match is None:
        return ""
    return (
        f"/*! jQuery v{match.group(1)} | (c) OpenJS Foundation and other"
        " contributors | jquery.org/license */\n"
    )


def minify(filename: str, dir: Path) -> Path:  # noqa: A002
    """Write a minified sibling of ``dir/filename`` and return its path."""
    logger = get_logger()
    src = dir / filename
    dest = dir / min_filename(filename)

    source = src.read_text(encoding="utf-8")
    minified = rjsmin.jsmin(source)
    dest.write_text(make_banner(source) + minified, encoding="utf-8")

    logger.info("[%s] %s created.", get_timestamp(), dest.name)
    return dest
