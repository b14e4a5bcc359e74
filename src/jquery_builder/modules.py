# src/jquery_builder/modules.py
"""Source tree scanning: filesystem paths ↔ module identifiers."""

from pathlib import Path, PurePath

from .utils_logs import get_logger


def module_name(path: Path | str, src_root: Path | str | None = None) -> str:
    """Turn a source file path into a module identifier.

    The source root prefix and the ``.js`` extension are removed and the
    separators are always forward slashes, whatever the host uses.

        src/css/showHide.js → css/showHide
    """
    pure = PurePath(path)
    if src_root is not None:
        try:
            pure = pure.relative_to(src_root)
        except ValueError:
            # already relative to the source root
            pass
    name = pure.as_posix()
    return name.removesuffix(".js")


def list_modules(src_root: Path, subdir: str) -> list[str]:
    """Recursively list every module under ``src_root/subdir``.

    A missing directory is not an error: a module without a folder of the
    same name simply has no sub-files to exclude.
    """
    logger = get_logger()
    base = src_root / subdir
    if not base.is_dir():
        logger.trace("[MODULES] no directory for %r", subdir)
        return []

    found: list[str] = []
    for entry in sorted(base.iterdir()):
        rel = f"{subdir}/{entry.name}"
        if entry.is_dir():
            found.extend(list_modules(src_root, rel))
        else:
            found.append(module_name(rel))

    logger.trace("[MODULES] %s → %d module(s)", subdir, len(found))
    return found
