# src/jquery_builder/build.py
"""Build jQuery bundles: resolve modules, run the optimizer, stamp, minify."""

import asyncio
from pathlib import Path

from . import vcs
from .bundle_config import get_bundle_config
from .compare_size import compare_size, supports_compare_size
from .constants import (
    DATE_PLACEHOLDER,
    DEFAULT_FILENAME,
    DEFAULT_SLIM_FILENAME,
    ENTRY_MODULE,
    GLOBAL_EXPORT_MODULE,
    SELECTOR_MODULES,
    SELECTOR_NATIVE_MODULE,
    VERSION_PLACEHOLDER,
)
from .exclude import resolve_exclusions
from .minify import min_filename
from .types import BuildContext, BuildOptions, BuildOptionsInput, SizeReport
from .utils import get_build_date, get_timestamp
from .utils_logs import get_logger


# exports/global stays as a stub since other modules reference it
NOOP_GLOBAL_EXPORT = (
    'define( [\n\t"../core"\n], function( jQuery ) {\n'
    "\tjQuery.noConflict = function() {};\n} );"
)
SELECTOR_NATIVE_OVERRIDE = f'define( [ "./{SELECTOR_NATIVE_MODULE}" ] );'


def make_build_options(
    options: BuildOptionsInput | None = None,
    *,
    default_dir: str = "dist",
) -> BuildOptions:
    """Fill in defaults for a single build."""
    options = options or {}
    return {
        "amd": options.get("amd"),
        "dir": options.get("dir") or default_dir,
        "exclude": list(options.get("exclude") or []),
        "filename": options.get("filename") or DEFAULT_FILENAME,
        "include": list(options.get("include") or []),
        "slim": bool(options.get("slim", False)),
        "version": options.get("version"),
    }


async def get_version(context: BuildContext) -> str:
    """``<base>+<sha>``, with ``.dirty`` if the working dir has changes."""
    commit = await vcs.short_commit_hash(context.root)
    is_clean = await vcs.is_clean_working_dir(context.root)
    return f"{context.base_version}+{commit}{'' if is_clean else '.dirty'}"


def entry_override(included: list[str]) -> str:
    """Entry module that depends on exactly ``included``."""
    deps = ",\n".join(f'\t"./{module}"' for module in included)
    return f"define( [\n{deps}\n] );"


def stamp(compiled: str, version: str, date: str) -> str:
    return compiled.replace(VERSION_PLACEHOLDER, version).replace(
        DATE_PLACEHOLDER, date
    )


async def build(
    options: BuildOptionsInput | None = None,
    *,
    context: BuildContext,
) -> Path:
    """Build one bundle and its minified sibling; return the bundle's path."""
    logger = get_logger()
    opts = make_build_options(options, default_dir=context.out_dir)

    # Add the short commit hash to the version string
    # when the version is not for a release.
    version = opts["version"] or await get_version(context)

    out_dir = context.root / opts["dir"]
    out_dir.mkdir(parents=True, exist_ok=True)

    exclude = opts["exclude"]
    if opts["slim"]:
        exclude = exclude + list(context.tables.slim_exclude)

    excluded, included = resolve_exclusions(
        exclude,
        opts["include"],
        src_root=context.src_dir,
        tables=context.tables,
    )
    config = get_bundle_config(context.src_dir, amd=opts["amd"])

    # Replace exports/global with a noop noConflict
    if GLOBAL_EXPORT_MODULE in excluded:
        excluded.remove(GLOBAL_EXPORT_MODULE)
        config["raw_text"][GLOBAL_EXPORT_MODULE] = NOOP_GLOBAL_EXPORT

    if any(module in excluded for module in SELECTOR_MODULES):
        config["raw_text"][SELECTOR_MODULES[0]] = SELECTOR_NATIVE_OVERRIDE

    if excluded:
        version += " -" + ",-".join(excluded)

        # Shallow, or core would go too: it is a dependency of everything
        config["exclude_shallow"] = excluded

    if included:
        version += " +" + ",+".join(included)
        config["include"] = included

        # Overwrite the default inclusions with the explicit ones provided
        config["raw_text"][ENTRY_MODULE] = entry_override(included)

    dest = out_dir / opts["filename"]

    def write_output(compiled: str) -> None:
        dest.write_text(stamp(compiled, version, get_build_date()), encoding="utf-8")

    config["out"] = write_output

    logger.debug("[BUILD] %s: excluded=%s included=%s", dest.name, excluded, included)
    try:
        await asyncio.to_thread(context.optimize, config)
    except Exception as e:
        logger.error("%s: %s", opts["filename"], e)  # noqa: TRY400
        raise

    logger.info("[%s] %s v%s created.", get_timestamp(), opts["filename"], version)

    await asyncio.to_thread(context.minify, opts["filename"], out_dir)
    return dest


async def build_default_files(
    *,
    context: BuildContext,
    version: str | None = None,
) -> SizeReport | None:
    """Build the standard and slim bundles side by side, then compare sizes."""
    logger = get_logger()
    results = await asyncio.gather(
        build({"version": version}, context=context),
        build(
            {"filename": DEFAULT_SLIM_FILENAME, "slim": True, "version": version},
            context=context,
        ),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    if not supports_compare_size():
        logger.debug("zlib unavailable, skipping size comparison")
        return None

    out_dir = context.root / context.out_dir
    try:
        return compare_size(
            [
                out_dir / min_filename(DEFAULT_FILENAME),
                out_dir / min_filename(DEFAULT_SLIM_FILENAME),
            ]
        )
    except (OSError, ValueError) as e:
        logger.warning("Size comparison failed: %s", e)
        return None
