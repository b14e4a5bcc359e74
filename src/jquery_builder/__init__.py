# src/jquery_builder/__init__.py

"""jQuery Builder: assemble jQuery's AMD sources into distributable bundles.

Full developer API
==================
This package re-exports the public symbols of its submodules, making it
suitable for programmatic use or custom build scripts. Functions named
after their own module (build, minify, compare_size) are not re-exported,
so ``jquery_builder.build`` and friends stay the submodules.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                  → CLI entrypoint
    - build.build()           → Build one bundle (coroutine)
    - build_default_files()   → Build jquery.js and jquery.slim.js (coroutine)
    - resolve_exclusions()    → Expand an exclude request into module sets
    - convert()               → Rewrite one AMD module for concatenation
"""

from .actions import get_metadata, run_selftest
from .build import build_default_files, get_version, make_build_options
from .bundle_config import get_bundle_config, read_wrapper
from .cli import main
from .compare_size import supports_compare_size
from .config import (
    determine_log_level,
    find_config,
    load_build_context,
    load_config,
    make_tables,
    read_package_version,
    validate_config,
)
from .constants import (
    DEFAULT_FILENAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MINIMUM,
    DEFAULT_OUT_DIR,
    DEFAULT_REMOVE_WITH,
    DEFAULT_SLIM_EXCLUDE,
    DEFAULT_SLIM_FILENAME,
    DEFAULT_SRC_DIR,
)
from .engine import BundleError, find_dependencies, optimize
from .exclude import ExclusionError, resolve_exclusions
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .minify import make_banner, min_filename
from .modules import list_modules, module_name
from .rewrite import convert, make_converter
from .runtime import Runtime, current_runtime
from .types import (
    BuildContext,
    BuildOptions,
    BuildOptionsInput,
    BuildTables,
    BundleConfig,
    RemoveWith,
    SizeReport,
)
from .utils_logs import LEVEL_ORDER, get_logger, set_log_level
from .vcs import VersionControlError, is_clean_working_dir, short_commit_hash


__all__ = [  # noqa: RUF022
    # --- CLI / Actions ---
    "get_metadata",
    "main",
    "run_selftest",
    #
    # --- Build ---
    "build_default_files",
    "get_version",
    "make_build_options",
    #
    # --- Modules / Rewrites / Engine ---
    "BundleError",
    "ExclusionError",
    "convert",
    "find_dependencies",
    "get_bundle_config",
    "list_modules",
    "make_converter",
    "module_name",
    "optimize",
    "read_wrapper",
    "resolve_exclusions",
    #
    # --- Collaborators ---
    "VersionControlError",
    "is_clean_working_dir",
    "make_banner",
    "min_filename",
    "short_commit_hash",
    "supports_compare_size",
    #
    # --- Config Handling ---
    "determine_log_level",
    "find_config",
    "load_build_context",
    "load_config",
    "make_tables",
    "read_package_version",
    "validate_config",
    #
    # --- Constants / Metadata / Runtime ---
    "DEFAULT_FILENAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MINIMUM",
    "DEFAULT_OUT_DIR",
    "DEFAULT_REMOVE_WITH",
    "DEFAULT_SLIM_EXCLUDE",
    "DEFAULT_SLIM_FILENAME",
    "DEFAULT_SRC_DIR",
    "LEVEL_ORDER",
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "current_runtime",
    "get_logger",
    "set_log_level",
    #
    # --- Types ---
    "BuildContext",
    "BuildOptions",
    "BuildOptionsInput",
    "BuildTables",
    "BundleConfig",
    "RemoveWith",
    "Runtime",
    "SizeReport",
]
