# src/jquery_builder/types.py
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

from typing_extensions import NotRequired


# (module name, module path, module contents) → contents to concatenate
BuildWriteHook = Callable[[str, str, str], str]
OutHook = Callable[[str], None]


@dataclass(frozen=True)
class RemoveWith:
    """Modules that go (and come) along with an excluded module."""

    remove: tuple[str, ...]
    include: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildTables:
    """Static module tables, loaded once and shared read-only by all builds."""

    remove_with: Mapping[str, RemoveWith]
    minimum: frozenset[str]
    slim_exclude: tuple[str, ...]


class WrapConfig(TypedDict):
    start: str
    end: str


class BundleConfig(TypedDict):
    base_url: Path
    name: str

    use_strict: bool
    optimize: str
    find_nested_dependencies: bool
    skip_module_insertion: bool
    skip_semicolon_insertion: bool

    wrap: WrapConfig
    raw_text: dict[str, str]
    on_build_write: BuildWriteHook

    include: list[str]
    exclude_shallow: list[str]
    out: OutHook | None


class BuildOptionsInput(TypedDict, total=False):
    amd: str | None
    dir: str
    exclude: list[str]
    filename: str
    include: list[str]
    slim: bool
    version: str | None


class BuildOptions(TypedDict):
    amd: str | None  # "" → anonymous define
    dir: str
    exclude: list[str]
    filename: str
    include: list[str]
    slim: bool
    version: str | None


class ProjectConfig(TypedDict, total=False):
    src: str
    dir: str
    removeWith: dict[str, list[str] | dict[str, list[str]]]  # noqa: N815
    minimum: list[str]
    slimExclude: list[str]  # noqa: N815
    log_level: str
    strict_config: bool


class SizeEntry(TypedDict):
    raw: int
    gz: int
    raw_delta: NotRequired[int]
    gz_delta: NotRequired[int]


SizeReport = dict[str, SizeEntry]


Optimizer = Callable[[BundleConfig], None]
Minifier = Callable[[str, Path], Path]


def _default_optimizer() -> Optimizer:
    from .engine import optimize  # noqa: PLC0415

    return optimize


def _default_minifier() -> Minifier:
    from .minify import minify  # noqa: PLC0415

    return minify


@dataclass(frozen=True)
class BuildContext:
    """Everything a build needs besides its per-invocation options."""

    root: Path
    src_dir: Path
    base_version: str
    tables: BuildTables
    out_dir: str = "dist"
    optimize: Optimizer = field(default_factory=_default_optimizer)
    minify: Minifier = field(default_factory=_default_minifier)


__all__ = [
    "BuildContext",
    "BuildOptions",
    "BuildOptionsInput",
    "BuildTables",
    "BuildWriteHook",
    "BundleConfig",
    "Minifier",
    "Optimizer",
    "OutHook",
    "ProjectConfig",
    "RemoveWith",
    "SizeEntry",
    "SizeReport",
    "WrapConfig",
]
