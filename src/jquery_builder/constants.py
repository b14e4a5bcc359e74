# src/jquery_builder/constants.py
"""
Central constants used across the project.
"""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = False
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_SRC_DIR: str = "src"
DEFAULT_OUT_DIR: str = "dist"
DEFAULT_FILENAME: str = "jquery.js"
DEFAULT_SLIM_FILENAME: str = "jquery.slim.js"
DEFAULT_SIZE_CACHE: str = ".sizecache.json"

# --- source tree conventions ---
ENTRY_MODULE: str = "jquery"
WRAPPER_MODULE: str = "wrapper"
AMD_EXPORT_MODULE: str = "exports/amd"
GLOBAL_EXPORT_MODULE: str = "exports/global"
SELECTOR_NATIVE_MODULE: str = "selector-native"
# "sizzle" is the legacy name for "selector"
SELECTOR_MODULES: tuple[str, ...] = ("selector", "sizzle")

# --- artifact placeholders ---
VERSION_PLACEHOLDER: str = "@VERSION"
DATE_PLACEHOLDER: str = "@DATE"

# --- module tables ---
DEFAULT_MINIMUM: tuple[str, ...] = ("core",)

# Exclude specified modules if the module matching the key is removed
DEFAULT_REMOVE_WITH: dict[str, list[str] | dict[str, list[str]]] = {
    "ajax": ["manipulation/_evalUrl", "deprecated/ajax-event-alias"],
    "callbacks": ["deferred"],
    "css": ["effects", "dimensions", "offset"],
    "css/showHide": ["effects"],
    "deferred": {
        "remove": ["ajax", "effects", "queue", "core/ready"],
        "include": ["core/ready-no-deferred"],
    },
    "event": ["deprecated/ajax-event-alias", "deprecated/event"],
    "selector": ["css/hiddenVisibleSelectors", "effects/animatedSelector"],
}

# Modules that are excluded from the slim build
DEFAULT_SLIM_EXCLUDE: tuple[str, ...] = (
    "ajax",
    "callbacks",
    "deferred",
    "effects",
    "queue",
)
