# tests/utils/__init__.py

from .patch_everywhere import patch_everywhere
from .source_tree import (
    SOURCE_FILES,
    make_context,
    make_source_tree,
    make_tables,
)
from .trace import TRACE, make_trace

__all__ = [
    "SOURCE_FILES",
    "TRACE",
    "make_context",
    "make_source_tree",
    "make_tables",
    "make_trace",
    "patch_everywhere",
]
