# src/jquery_builder/exclude.py
"""Resolve requested exclusions into a closed set of modules to drop or add."""

from collections.abc import Sequence
from pathlib import Path

from .constants import SELECTOR_MODULES
from .modules import list_modules
from .types import BuildTables
from .utils import unique
from .utils_logs import get_logger


class ExclusionError(ValueError):
    """A requested exclusion would remove a module the build cannot live without."""

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(f'Module "{module}" is a minimum requirement.')


def resolve_exclusions(
    exclude: Sequence[str],
    include: Sequence[str],
    *,
    src_root: Path,
    tables: BuildTables,
) -> tuple[list[str], list[str]]:
    """Expand an exclude request into ``(excluded, included)``.

    Every requested module drags along all files in the folder of the same
    name and, through ``tables.remove_with``, the modules that cannot work
    without it. Only the modules of *this* request are expanded; files found
    by scanning a folder are never looked up in the table.

    Both lists are de-duplicated, first occurrence first.

    Raises:
        ExclusionError: if any module in the request (or pulled in through
            the table) belongs to ``tables.minimum``.
    """
    logger = get_logger()
    excluded = list(exclude)
    included = list(include)

    for module in exclude:
        if module in tables.minimum:
            raise ExclusionError(module)

        # `selector` is swapped for `selector-native`, which re-uses parts of
        # the `src/selector` folder, so its files must stay.
        if module not in SELECTOR_MODULES:
            excluded.extend(list_modules(src_root, module))

        additional = tables.remove_with.get(module)
        if additional:
            logger.trace(
                "[EXCLUDE] %s → remove=%s include=%s",
                module,
                list(additional.remove),
                list(additional.include),
            )
            more_excluded, more_included = resolve_exclusions(
                additional.remove,
                additional.include,
                src_root=src_root,
                tables=tables,
            )
            excluded.extend(more_excluded)
            included.extend(more_included)

    return unique(excluded), unique(included)
