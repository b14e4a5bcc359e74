# src/jquery_builder/rewrite.py
"""Per-module text rewrites applied while the bundle is being written.

Every module in ``src/`` is an AMD module::

    define( [
        "./core",
        "./var/arr"
    ], function( jQuery, arr ) {

    "use strict";

    ...

    return jQuery;
    } );

The bundle is one closure, so the wrappers are stripped and the bodies are
concatenated. Modules inside a ``var`` folder only return one value; they
become ``var name = value;`` declarations instead.

All rewrites are plain regular expressions over these fixed conventions.
Anything shaped differently is passed through as-is or mangled; no attempt
is made to parse JavaScript.
"""

import re
from pathlib import Path

from .constants import AMD_EXPORT_MODULE
from .types import BuildWriteHook
from .utils_logs import get_logger


# closing `} );` of a define() wrapper, plus trailing whitespace/comments
RE_DEFINE_END = re.compile(r"\}\s*?\);[^}\w]*\Z")

RE_VAR_DEFINE = re.compile(r"define\(\s*(?:([\"'])[\w\W]*?\1)?[\w\W]*?return")
RE_VAR_NAME = re.compile(r"var/([\w-]+)")
RE_VAR_PATH = re.compile(r"(?:^|/)var/")

RE_TRAILING_RETURN = re.compile(r"\s*return\s+[^}]+(\}\s*?\);[^\w}]*)\Z")
RE_NAMED_EXPORTS = re.compile(r"\s*exports\.\w+\s*=\s*\w+;")
RE_DEFINE_START = re.compile(r"define\([^{]*?{\s*(?:(\"|')use strict\1(?:;|))?")

RE_EXCLUDE_BLOCK = re.compile(
    r"/\*\s*ExcludeStart\s*\*/[\w\W]*?/\*\s*ExcludeEnd\s*\*/",
    re.IGNORECASE,
)
RE_BUILD_EXCLUDE = re.compile(r"//\s*BuildExclude\n\r?[\w\W]*?\n\r?", re.IGNORECASE)

RE_EMPTY_DEFINE = re.compile(r"define\(\s*\[[^\]]*\]\s*\)[\W\n]+\Z")

RE_AMD_NAME = re.compile(r"(\s*)\"jquery\"(,\s*)")


def is_var_module(path: str, src_root: Path | None = None) -> bool:
    """True for files living in a ``var`` folder.

    Only the part of the path below ``src_root`` is looked at, so a checkout
    that itself sits under some ``var/`` directory is not mistaken for one.
    Without ``src_root`` the current working directory prefix is dropped.
    """
    file_path = Path(path)
    if src_root is not None and file_path.is_relative_to(src_root):
        posix = file_path.relative_to(src_root).as_posix()
    else:
        posix = file_path.as_posix().replace(Path.cwd().as_posix(), "", 1)
    return bool(RE_VAR_PATH.search(posix))


def convert_var_module(name: str, contents: str) -> str:
    """``define( [...], function() { return x; } );`` → ``var name = x;``"""
    match = RE_VAR_NAME.search(name)
    if match is None:
        xmsg = f"Cannot derive a variable name from module {name!r}"
        raise ValueError(xmsg)
    contents = RE_VAR_DEFINE.sub(f"var {match.group(1)} =", contents, count=1)
    return RE_DEFINE_END.sub("", contents, count=1)


def strip_define(contents: str) -> str:
    """Unwrap a regular module so its body can be concatenated."""
    # The module's own return value is implied by the shared closure
    contents = RE_TRAILING_RETURN.sub(r"\1", contents, count=1)

    # Multiple exports
    contents = RE_NAMED_EXPORTS.sub("", contents)

    # Remove define wrappers, closure ends, and empty declarations
    contents = RE_DEFINE_START.sub("", contents, count=1)
    contents = RE_DEFINE_END.sub("", contents, count=1)

    # Remove anything wrapped with /* ExcludeStart */ /* ExcludeEnd */
    # or a single line directly after a // BuildExclude comment
    contents = RE_EXCLUDE_BLOCK.sub("", contents)
    contents = RE_BUILD_EXCLUDE.sub("", contents)

    return RE_EMPTY_DEFINE.sub("", contents, count=1)


def set_amd_name(contents: str, amd: str) -> str:
    """Rename the AMD module id, or drop it (and its comma) when ``amd`` is empty."""
    logger = get_logger()
    if amd:
        logger.info("Naming jQuery with AMD name: %s", amd)
        replacement = rf'\1"{_escape_replacement(amd)}"\2'
    else:
        logger.info("AMD name now anonymous")
        replacement = ""
    return RE_AMD_NAME.sub(replacement, contents, count=1)


def _escape_replacement(text: str) -> str:
    return text.replace("\\", "\\\\")


def convert(
    name: str,
    path: str,
    contents: str,
    *,
    amd: str | None = None,
    src_root: Path | None = None,
) -> str:
    """Rewrite one module's source for flat concatenation.

    Args:
        name: module identifier, e.g. ``core/var/rsingleTag``
        path: file the module was read from
        contents: the module source, AMD wrapper included
        amd: AMD name to give jQuery; ``""`` makes the define anonymous,
            ``None`` leaves it alone
        src_root: source folder; only the path below it decides whether
            this is a ``var`` module
    """
    if is_var_module(path, src_root):
        contents = convert_var_module(name, contents)
    else:
        contents = strip_define(contents)

    if amd is not None and name == AMD_EXPORT_MODULE:
        contents = set_amd_name(contents, amd)

    return contents


def make_converter(
    amd: str | None = None,
    src_root: Path | None = None,
) -> BuildWriteHook:
    """Bind ``amd`` and ``src_root`` so the result can be the engine's write hook."""

    def on_build_write(name: str, path: str, contents: str) -> str:
        return convert(name, path, contents, amd=amd, src_root=src_root)

    return on_build_write


__all__ = [
    "convert",
    "convert_var_module",
    "is_var_module",
    "make_converter",
    "set_amd_name",
    "strip_define",
]
