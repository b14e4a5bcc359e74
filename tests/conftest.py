# tests/conftest.py
"""
Shared test setup for project.

Every test starts from a known runtime: info-level logging, no ANSI colors,
and the temporary directory as working directory.
"""

from pathlib import Path

import pytest
from pytest import Config, Item as PytestItem

import jquery_builder.runtime as mod_runtime
from tests.utils import make_trace

TRACE = make_trace("⚡️")


@pytest.fixture(autouse=True)
def _isolated_runtime(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setitem(mod_runtime.current_runtime, "log_level", "info")
    monkeypatch.setitem(mod_runtime.current_runtime, "use_color", False)
    monkeypatch.delenv("JQUERY_BUILDER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    TRACE("runtime reset", tmp_path)


def pytest_collection_modifyitems(
    config: Config,
    items: list[PytestItem],
) -> None:
    """Automatically skip debug tests unless asked for."""
    keywords = config.getoption("-k") or ""
    if "debug" in keywords.lower():
        return  # user explicitly requested them, don't skip

    for item in items:
        if "debug" in item.keywords:
            item.add_marker(
                pytest.mark.skip(reason="Skipped debug test (use -k debug to run)")
            )
