# src/jquery_builder/engine.py
"""A minimal AMD optimizer: trace ``define()`` dependencies and concatenate.

Only what the jQuery sources need is supported: one anonymous (or named)
``define( [ deps ], factory )`` per file, relative or top-level string ids,
``require( [ deps ] )`` calls when nested dependency discovery is on, and
the ``raw_text``/``include``/``exclude_shallow`` knobs of the build config.
"""

import posixpath
import re
from pathlib import Path

from .types import BundleConfig
from .utils import plural
from .utils_logs import get_logger


class BundleError(RuntimeError):
    """The optimizer could not produce a bundle."""


RE_DEFINE_CALL = re.compile(r"\bdefine\(")
RE_DEFINE_DEPS = re.compile(r"define\(\s*(?:([\"'])[^\"']*\1\s*,\s*)?\[([^\]]*)\]")
RE_REQUIRE_DEPS = re.compile(r"\brequire\(\s*\[([^\]]*)\]")
RE_STRING = re.compile(r"[\"']([^\"']+)[\"']")

# Pseudo-dependencies provided by the AMD loader itself
SPECIAL_DEPENDENCIES = frozenset({"require", "exports", "module"})


def resolve_id(from_id: str, dep: str) -> str:
    """Resolve ``./x`` and ``../x`` against the requiring module's folder."""
    if dep.startswith("."):
        return posixpath.normpath(posixpath.join(posixpath.dirname(from_id), dep))
    return dep


def find_dependencies(
    module_id: str,
    contents: str,
    *,
    find_nested: bool = True,
) -> list[str]:
    """Return the module ids ``contents`` depends on, in declaration order."""
    lists: list[str] = []

    # Only the first define() is the module's own; jQuery's AMD export
    # contains a second, named one.
    start = RE_DEFINE_CALL.search(contents)
    if start:
        match = RE_DEFINE_DEPS.match(contents, start.start())
        if match:
            lists.append(match.group(2))

    if find_nested:
        lists.extend(m.group(1) for m in RE_REQUIRE_DEPS.finditer(contents))

    deps: list[str] = []
    for raw in lists:
        for dep in RE_STRING.findall(raw):
            if dep in SPECIAL_DEPENDENCIES:
                continue
            resolved = resolve_id(module_id, dep)
            if resolved not in deps:
                deps.append(resolved)
    return deps


class _Tracer:
    def __init__(self, config: BundleConfig) -> None:
        self.config = config
        self.base_url = Path(config["base_url"])
        self.order: list[str] = []
        self.sources: dict[str, tuple[Path, str]] = {}
        self._visiting: set[str] = set()

    def read(self, module_id: str, required_by: str | None) -> tuple[Path, str]:
        path = self.base_url / f"{module_id}.js"
        raw_text = self.config["raw_text"]
        if module_id in raw_text:
            return path, raw_text[module_id]
        try:
            return path, path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            via = f" (required by {required_by!r})" if required_by else ""
            xmsg = f"Module {module_id!r} not found at {path}{via}"
            raise BundleError(xmsg) from e

    def visit(self, module_id: str, required_by: str | None = None) -> None:
        logger = get_logger()
        if module_id in self.sources:
            return
        if module_id in self._visiting:
            logger.trace("[ENGINE] cycle: %s ↔ %s, skipping", required_by, module_id)
            return

        self._visiting.add(module_id)
        path, contents = self.read(module_id, required_by)
        deps = find_dependencies(
            module_id,
            contents,
            find_nested=self.config["find_nested_dependencies"],
        )
        logger.trace("[ENGINE] %s → %s", module_id, deps)
        for dep in deps:
            self.visit(dep, module_id)
        self._visiting.discard(module_id)

        self.sources[module_id] = (path, contents)
        self.order.append(module_id)


def optimize(config: BundleConfig) -> None:
    """Trace, rewrite and concatenate the modules described by ``config``.

    The result is wrapped in ``config["wrap"]`` and handed to
    ``config["out"]``.

    Raises:
        BundleError: on an unsupported optimizer setting, a missing module,
            or a missing ``out`` callback.
    """
    logger = get_logger()
    if config["optimize"] != "none":
        xmsg = f"Unsupported optimize setting: {config['optimize']!r}"
        raise BundleError(xmsg)

    out = config["out"]
    if out is None:
        xmsg = "No output callback configured"
        raise BundleError(xmsg)

    tracer = _Tracer(config)
    for module_id in config["include"]:
        tracer.visit(module_id)
    tracer.visit(config["name"])

    skipped = set(config["exclude_shallow"])
    hook = config["on_build_write"]
    parts: list[str] = []
    for module_id in tracer.order:
        if module_id in skipped:
            logger.trace("[ENGINE] excluded: %s", module_id)
            continue
        path, contents = tracer.sources[module_id]
        parts.append(hook(module_id, str(path), contents))

    written = len(parts)
    logger.debug(
        "[ENGINE] %d module%s written, %d excluded",
        written,
        plural(written),
        len(tracer.order) - written,
    )

    wrap = config["wrap"]
    out(wrap["start"] + "\n".join(parts) + wrap["end"])
