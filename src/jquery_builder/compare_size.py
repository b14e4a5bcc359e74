# src/jquery_builder/compare_size.py
"""Report raw and gzipped sizes of built files against the previous run."""

import importlib.util
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .constants import DEFAULT_SIZE_CACHE
from .types import SizeEntry, SizeReport
from .utils_logs import get_logger


def supports_compare_size() -> bool:
    """Gzip sizes need zlib, which minimal interpreter builds may lack."""
    return importlib.util.find_spec("zlib") is not None


def _gzip_size(data: bytes) -> int:
    import gzip  # noqa: PLC0415

    return len(gzip.compress(data, compresslevel=9, mtime=0))


def _load_cache(cache: Path) -> dict[str, Any]:
    if not cache.exists():
        return {}
    try:
        data = json.loads(cache.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        get_logger().warning("Ignoring unreadable size cache: %s", cache)
        return {}
    return data if isinstance(data, dict) else {}


def _cached_entry(last: Any) -> tuple[int, int] | None:
    """(raw, gz) from a cache entry, or None when it is not two sizes."""
    if not isinstance(last, dict):
        return None
    raw, gz = last.get("raw"), last.get("gz")
    for value in (raw, gz):
        if not isinstance(value, int) or isinstance(value, bool):
            return None
    return raw, gz


def _delta(value: int) -> str:
    if value == 0:
        return "="
    return f"{value:+d}"


def compare_size(
    files: Sequence[Path | str],
    *,
    cache: Path | None = None,
) -> SizeReport:
    """Measure ``files`` and log a size table.

    Sizes from the last run are read from (and then replaced in) ``cache``,
    which defaults to ``.sizecache.json`` next to the first file.
    """
    logger = get_logger()
    paths = [Path(f) for f in files]
    if not paths:
        return {}
    cache = cache or paths[0].parent / DEFAULT_SIZE_CACHE
    previous = _load_cache(cache)

    report: SizeReport = {}
    for path in paths:
        data = path.read_bytes()
        entry: SizeEntry = {"raw": len(data), "gz": _gzip_size(data)}
        last = _cached_entry(previous.get(path.name))
        if last is not None:
            entry["raw_delta"] = entry["raw"] - last[0]
            entry["gz_delta"] = entry["gz"] - last[1]
        report[path.name] = entry

    logger.info("   raw     gz Sizes")
    for name, entry in report.items():
        logger.info("%6d %6d %s", entry["raw"], entry["gz"], name)

    if previous:
        logger.info("\n   raw     gz Compared to last run")
        for name, entry in report.items():
            if "raw_delta" in entry:
                logger.info(
                    "%6s %6s %s",
                    _delta(entry["raw_delta"]),
                    _delta(entry["gz_delta"]),
                    name,
                )

    cache.write_text(
        json.dumps(
            {name: {"raw": e["raw"], "gz": e["gz"]} for name, e in report.items()},
            indent=2,
        ),
        encoding="utf-8",
    )
    return report
