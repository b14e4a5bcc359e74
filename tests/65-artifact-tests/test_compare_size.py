# tests/65-artifact-tests/test_compare_size.py
"""Tests for jquery_builder.compare_size."""

import gzip
import json
from pathlib import Path

import pytest

import jquery_builder.compare_size as mod_compare_size


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_supports_compare_size() -> None:
    assert mod_compare_size.supports_compare_size() is True


def test_report_has_raw_and_gzip_sizes(tmp_path: Path) -> None:
    # --- setup ---
    a = _write(tmp_path / "jquery.min.js", "var a=1;" * 100)
    b = _write(tmp_path / "jquery.slim.min.js", "var b=2;")

    # --- execute ---
    report = mod_compare_size.compare_size([a, b])

    # --- verify ---
    assert list(report) == ["jquery.min.js", "jquery.slim.min.js"]
    assert report["jquery.min.js"]["raw"] == 800
    assert report["jquery.min.js"]["gz"] == len(
        gzip.compress(a.read_bytes(), compresslevel=9, mtime=0)
    )
    assert report["jquery.min.js"]["gz"] < 800
    assert "raw_delta" not in report["jquery.slim.min.js"]


def test_cache_is_written_next_to_first_file(tmp_path: Path) -> None:
    a = _write(tmp_path / "a.js", "abc")

    mod_compare_size.compare_size([a])

    cache = json.loads((tmp_path / ".sizecache.json").read_text(encoding="utf-8"))
    assert cache == {"a.js": {"raw": 3, "gz": mod_compare_size._gzip_size(b"abc")}}  # pyright: ignore[reportPrivateUsage]


def test_deltas_against_last_run(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    a = _write(tmp_path / "a.js", "abc")
    b = _write(tmp_path / "b.js", "same")
    mod_compare_size.compare_size([a, b])
    _write(a, "abcdef")
    capsys.readouterr()

    # --- execute ---
    report = mod_compare_size.compare_size([a, b])

    # --- verify ---
    assert report["a.js"]["raw_delta"] == 3
    assert report["b.js"]["raw_delta"] == 0
    out = capsys.readouterr().out
    assert "Compared to last run" in out
    assert "+3" in out
    assert "=" in out


def test_explicit_cache_path(tmp_path: Path) -> None:
    a = _write(tmp_path / "a.js", "abc")
    cache = tmp_path / "sizes.json"

    mod_compare_size.compare_size([a], cache=cache)

    assert cache.exists()
    assert not (tmp_path / ".sizecache.json").exists()


def test_unreadable_cache_is_ignored(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    a = _write(tmp_path / "a.js", "abc")
    _write(tmp_path / ".sizecache.json", "{not json")

    report = mod_compare_size.compare_size([a])

    assert "raw_delta" not in report["a.js"]
    assert "Ignoring unreadable size cache" in capsys.readouterr().err


@pytest.mark.parametrize(
    "entry",
    [
        {"raw": None, "gz": None},
        {"raw": "12", "gz": 4},
        {"raw": 3},
        {"raw": True, "gz": 1},
        None,
        [3, 4],
    ],
)
def test_non_numeric_cache_entry_is_ignored(tmp_path: Path, entry: object) -> None:
    # --- setup ---
    a = _write(tmp_path / "a.js", "abc")
    b = _write(tmp_path / "b.js", "abc")
    _write(
        tmp_path / ".sizecache.json",
        json.dumps({"a.js": entry, "b.js": {"raw": 1, "gz": 1}}),
    )

    # --- execute ---
    report = mod_compare_size.compare_size([a, b])

    # --- verify ---
    assert "raw_delta" not in report["a.js"]
    assert report["b.js"]["raw_delta"] == 2
    cache = json.loads((tmp_path / ".sizecache.json").read_text(encoding="utf-8"))
    assert cache["a.js"]["raw"] == 3


def test_no_files() -> None:
    assert mod_compare_size.compare_size([]) == {}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        mod_compare_size.compare_size([tmp_path / "gone.js"])
