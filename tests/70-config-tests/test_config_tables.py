# tests/70-config-tests/test_config_tables.py
"""Tests for config validation, module tables and the build context."""

import json
from pathlib import Path
from typing import Any

import pytest

import jquery_builder.config as mod_config
import jquery_builder.constants as mod_constants
from jquery_builder.types import RemoveWith
from tests.utils import make_source_tree


# ---------------------------------------------------------------------------
# validate_config()
# ---------------------------------------------------------------------------


def test_valid_config_passes_through() -> None:
    raw: dict[str, Any] = {
        "src": "src",
        "removeWith": {"css": ["effects"], "deferred": {"remove": ["ajax"]}},
        "minimum": ["core", "selector"],
        "log_level": "debug",
    }

    assert mod_config.validate_config(raw) == raw


def test_unknown_key_warns(capsys: pytest.CaptureFixture[str]) -> None:
    mod_config.validate_config({"srcs": "src", "outdir": "x"}, source="cfg")

    assert "cfg: unknown keys outdir, srcs" in capsys.readouterr().err


def test_unknown_key_fails_when_strict() -> None:
    with pytest.raises(ValueError, match="unknown key srcs"):
        mod_config.validate_config({"srcs": "src", "strict_config": True})


@pytest.mark.parametrize(
    "raw,match",
    [
        ({"src": 1}, "'src' must be of type str"),
        ({"removeWith": []}, "'removeWith' must be of type dict"),
        ({"minimum": ["core", 2]}, "'minimum' must be a list of strings"),
        ({"slimExclude": "ajax"}, "'slimExclude' must be of type list"),
        ({"removeWith": {"css": "effects"}}, "'removeWith.css' must be a list"),
        (
            {"removeWith": {"deferred": {"remove": "ajax"}}},
            "'removeWith.deferred.remove' must be a list of strings",
        ),
    ],
)
def test_wrong_types_rejected(raw: dict[str, Any], match: str) -> None:
    with pytest.raises(TypeError, match=match):
        mod_config.validate_config(raw)


def test_bad_log_level_rejected() -> None:
    with pytest.raises(ValueError, match="unknown log_level 'loud'"):
        mod_config.validate_config({"log_level": "loud"})


def test_remove_with_extra_fields_rejected() -> None:
    with pytest.raises(ValueError, match="unknown field"):
        mod_config.validate_config({"removeWith": {"a": {"remove": [], "also": []}}})


@pytest.mark.parametrize("entry", [["a"], {"remove": ["b", "a"]}])
def test_remove_with_self_reference_rejected(entry: Any) -> None:
    with pytest.raises(ValueError, match="must not remove itself"):
        mod_config.validate_config({"removeWith": {"a": entry}})


# ---------------------------------------------------------------------------
# make_tables()
# ---------------------------------------------------------------------------


def test_default_tables() -> None:
    # --- execute ---
    tables = mod_config.make_tables()

    # --- verify ---
    assert tables.minimum == frozenset({"core"})
    assert tables.slim_exclude == mod_constants.DEFAULT_SLIM_EXCLUDE
    assert tables.remove_with["callbacks"] == RemoveWith(remove=("deferred",))
    assert tables.remove_with["deferred"] == RemoveWith(
        remove=("ajax", "effects", "queue", "core/ready"),
        include=("core/ready-no-deferred",),
    )
    assert set(tables.remove_with) == set(mod_constants.DEFAULT_REMOVE_WITH)


def test_tables_are_read_only() -> None:
    tables = mod_config.make_tables()

    with pytest.raises(TypeError):
        tables.remove_with["new"] = RemoveWith(remove=())  # type: ignore[index]


def test_config_entries_replace_defaults() -> None:
    # --- execute ---
    tables = mod_config.make_tables(
        {
            "removeWith": {"css": ["offset"], "wrap": ["manipulation"]},
            "minimum": ["core", "selector"],
            "slimExclude": ["ajax"],
        }
    )

    # --- verify ---
    assert tables.remove_with["css"].remove == ("offset",)
    assert tables.remove_with["wrap"].remove == ("manipulation",)
    assert tables.remove_with["ajax"].remove == (
        "manipulation/_evalUrl",
        "deprecated/ajax-event-alias",
    )
    assert tables.minimum == frozenset({"core", "selector"})
    assert tables.slim_exclude == ("ajax",)


# ---------------------------------------------------------------------------
# read_package_version() / load_build_context()
# ---------------------------------------------------------------------------


def test_package_version(tmp_path: Path) -> None:
    make_source_tree(tmp_path, version="3.7.1")
    assert mod_config.read_package_version(tmp_path) == "3.7.1"


def test_package_json_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match=r"package\.json"):
        mod_config.read_package_version(tmp_path)


@pytest.mark.parametrize(
    "content",
    ["{broken", json.dumps({"name": "jquery"}), json.dumps({"version": ""}), "[]"],
)
def test_package_json_unusable(tmp_path: Path, content: str) -> None:
    (tmp_path / "package.json").write_text(content)

    with pytest.raises(ValueError):  # noqa: PT011
        mod_config.read_package_version(tmp_path)


def test_build_context(tmp_path: Path) -> None:
    # --- setup ---
    make_source_tree(tmp_path)

    # --- execute ---
    context = mod_config.load_build_context(tmp_path, {"dir": "out"})

    # --- verify ---
    assert context.root == tmp_path.resolve()
    assert context.src_dir == (tmp_path / "src").resolve()
    assert context.base_version == "4.0.0-pre"
    assert context.out_dir == "out"
    assert context.tables.minimum == frozenset({"core"})


def test_build_context_custom_src(tmp_path: Path) -> None:
    make_source_tree(tmp_path)
    (tmp_path / "src").rename(tmp_path / "lib")

    context = mod_config.load_build_context(tmp_path, {"src": "lib"})

    assert context.src_dir == (tmp_path / "lib").resolve()


def test_build_context_missing_src(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"version": "1.0.0"}')

    with pytest.raises(FileNotFoundError, match="Source directory not found"):
        mod_config.load_build_context(tmp_path)
