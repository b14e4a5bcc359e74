# src/jquery_builder/config.py


import argparse
import json
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

from .constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MINIMUM,
    DEFAULT_OUT_DIR,
    DEFAULT_REMOVE_WITH,
    DEFAULT_SLIM_EXCLUDE,
    DEFAULT_SRC_DIR,
    DEFAULT_STRICT_CONFIG,
)
from .meta import PROGRAM_ENV, PROGRAM_SCRIPT
from .types import BuildContext, BuildTables, ProjectConfig, RemoveWith
from .utils import load_jsonc, plural, remove_path_in_error_message
from .utils_logs import LEVEL_ORDER, get_logger


KNOWN_KEYS: dict[str, type | tuple[type, ...]] = {
    "src": str,
    "dir": str,
    "removeWith": dict,
    "minimum": list,
    "slimExclude": list,
    "log_level": str,
    "strict_config": bool,
}


def determine_log_level(
    args: argparse.Namespace,
    config_log_level: str | None = None,
) -> str:
    """Resolve log level from CLI → env → config → default."""
    if getattr(args, "log_level", None):
        return cast("str", args.log_level)

    env_log_level = os.getenv(f"{PROGRAM_ENV}_LOG_LEVEL") or os.getenv("LOG_LEVEL")
    if env_log_level:
        return env_log_level

    if config_log_level:
        return config_log_level

    return DEFAULT_LOG_LEVEL


def find_config(config: str | Path | None, root: Path) -> Path | None:
    """Locate the project configuration file.

    Search order:
      1. Explicit path (--config); a missing file is a hard failure
      2. .{PROGRAM_SCRIPT}.jsonc, then .{PROGRAM_SCRIPT}.json in ``root``

    Returns None when no file is found; every setting has a default.
    """
    logger = get_logger()
    if config:
        path = Path(config).expanduser().resolve()
        if not path.exists():
            xmsg = f"Specified config file not found: {path}"
            raise FileNotFoundError(xmsg)
        if path.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {path}"
            raise ValueError(xmsg)
        return path

    candidates = [root / f".{PROGRAM_SCRIPT}.jsonc", root / f".{PROGRAM_SCRIPT}.json"]
    found = [p for p in candidates if p.exists()]
    if not found:
        logger.debug("No config file found in %s, using defaults", root)
        return None

    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        logger.warning(
            "Multiple config files detected (%s); using %s.", names, found[0].name
        )
    return found[0]


def load_config(config_path: Path) -> ProjectConfig:
    """Load and validate a JSON/JSONC project config."""
    try:
        raw = load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        xmsg = f"{config_path.name} must contain an object, not {type(raw).__name__}"
        raise TypeError(xmsg)

    return validate_config(raw, source=config_path.name)


def _check_str_list(value: Any, key: str, source: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        xmsg = f"{source}: '{key}' must be a list of strings"
        raise TypeError(xmsg)
    return cast("list[str]", value)


def validate_config(raw: dict[str, Any], *, source: str = "config") -> ProjectConfig:
    """Type-check a raw config mapping; unknown keys warn unless strict."""
    logger = get_logger()
    strict = raw.get("strict_config", DEFAULT_STRICT_CONFIG)

    unknown = sorted(set(raw) - set(KNOWN_KEYS))
    if unknown:
        msg = f"{source}: unknown key{plural(unknown)} {', '.join(unknown)}"
        if strict:
            raise ValueError(msg)
        logger.warning(msg)

    for key, expected in KNOWN_KEYS.items():
        if key in raw and not isinstance(raw[key], expected):
            type_name = getattr(expected, "__name__", str(expected))
            xmsg = (
                f"{source}: '{key}' must be of type {type_name},"
                f" not {type(raw[key]).__name__}"
            )
            raise TypeError(xmsg)

    for key in ("minimum", "slimExclude"):
        if key in raw:
            _check_str_list(raw[key], key, source)

    for module, entry in raw.get("removeWith", {}).items():
        _parse_remove_with(module, entry, source=source)

    level = raw.get("log_level")
    if level is not None and level not in LEVEL_ORDER:
        xmsg = f"{source}: unknown log_level {level!r}"
        raise ValueError(xmsg)

    return cast("ProjectConfig", raw)


def _parse_remove_with(module: str, entry: Any, *, source: str) -> RemoveWith:
    key = f"removeWith.{module}"
    if isinstance(entry, list):
        remove = _check_str_list(entry, key, source)
        include: list[str] = []
    elif isinstance(entry, dict):
        extra = set(entry) - {"remove", "include"}
        if extra:
            xmsg = f"{source}: '{key}' has unknown field(s) {', '.join(sorted(extra))}"
            raise ValueError(xmsg)
        remove = _check_str_list(entry.get("remove", []), f"{key}.remove", source)
        include = _check_str_list(entry.get("include", []), f"{key}.include", source)
    else:
        xmsg = f"{source}: '{key}' must be a list or an object with remove/include"
        raise TypeError(xmsg)

    if module in remove:
        xmsg = f"{source}: '{key}' must not remove itself"
        raise ValueError(xmsg)
    return RemoveWith(remove=tuple(remove), include=tuple(include))


def make_tables(config: ProjectConfig | None = None) -> BuildTables:
    """Build the read-only module tables, config entries replacing defaults."""
    config = config or {}
    raw_remove_with: Mapping[str, Any] = {
        **DEFAULT_REMOVE_WITH,
        **config.get("removeWith", {}),
    }
    remove_with = {
        module: _parse_remove_with(module, entry, source="removeWith")
        for module, entry in raw_remove_with.items()
    }
    return BuildTables(
        remove_with=MappingProxyType(remove_with),
        minimum=frozenset(config.get("minimum", DEFAULT_MINIMUM)),
        slim_exclude=tuple(config.get("slimExclude", DEFAULT_SLIM_EXCLUDE)),
    )


def read_package_version(root: Path) -> str:
    """Base version from the project's package.json."""
    package_json = root / "package.json"
    if not package_json.exists():
        xmsg = f"package.json not found in {root}"
        raise FileNotFoundError(xmsg)

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        xmsg = f"Invalid package.json: {e.msg} (line {e.lineno}, column {e.colno})"
        raise ValueError(xmsg) from e

    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str) or not version:
        xmsg = f"No version field in {package_json}"
        raise ValueError(xmsg)
    return version


def load_build_context(
    root: Path,
    config: ProjectConfig | None = None,
) -> BuildContext:
    """Everything static about the project, resolved once per process."""
    config = config or {}
    root = root.resolve()
    src_dir = (root / config.get("src", DEFAULT_SRC_DIR)).resolve()
    if not src_dir.is_dir():
        xmsg = f"Source directory not found: {src_dir}"
        raise FileNotFoundError(xmsg)

    return BuildContext(
        root=root,
        src_dir=src_dir,
        base_version=read_package_version(root),
        tables=make_tables(config),
        out_dir=config.get("dir", DEFAULT_OUT_DIR),
    )
