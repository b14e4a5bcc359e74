# src/jquery_builder/bundle_config.py

import re
from pathlib import Path

from .constants import ENTRY_MODULE, WRAPPER_MODULE
from .rewrite import make_converter
from .types import BundleConfig, WrapConfig


# Catch `// @CODE` and subsequent comment lines even if they don't start
# in the first column.
RE_CODE_MARKER = re.compile(r"[\x20\t]*// @CODE\n(?:[\x20\t]*//[^\n]+\n)*")
RE_ESLINT_COMMENT = re.compile(r"/\*\s*eslint(?: |-).*\s*\*/\n")


def read_wrapper(src_root: Path) -> WrapConfig:
    """Split ``wrapper.js`` around its ``// @CODE`` marker."""
    wrapper_path = src_root / f"{WRAPPER_MODULE}.js"
    source = wrapper_path.read_text(encoding="utf-8")

    parts = RE_CODE_MARKER.split(source)
    if len(parts) < 2:  # noqa: PLR2004
        xmsg = f"No '// @CODE' marker found in {wrapper_path}"
        raise ValueError(xmsg)

    return {
        "start": RE_ESLINT_COMMENT.sub("", parts[0], count=1),
        "end": parts[1],
    }


def get_bundle_config(src_root: Path, *, amd: str | None = None) -> BundleConfig:
    """Return the engine configuration shared by every build.

    ``raw_text``, ``include``, ``exclude_shallow`` and ``out`` start empty;
    the build fills them in for its own variant.
    """
    return {
        "base_url": src_root,
        "name": ENTRY_MODULE,
        # Allow strict mode
        "use_strict": True,
        # Minification is a separate step
        "optimize": "none",
        # Include dependencies loaded with require
        "find_nested_dependencies": True,
        # Avoid inserting define() placeholder
        "skip_module_insertion": True,
        # Avoid breaking semicolons
        "skip_semicolon_insertion": True,
        "wrap": read_wrapper(src_root),
        "raw_text": {},
        "on_build_write": make_converter(amd, src_root),
        "include": [],
        "exclude_shallow": [],
        "out": None,
    }
