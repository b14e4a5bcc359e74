# src/jquery_builder/actions.py
import asyncio
import json
import re
import shutil
import subprocess
import tempfile
from contextlib import suppress
from pathlib import Path

from .build import build
from .config import load_build_context
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, Metadata
from .utils_logs import LEVEL_ORDER, get_log_level, get_logger, temporary_log_level


def get_metadata() -> Metadata:
    """Return (version, commit) for this tool.

    The version comes from pyproject.toml next to the sources, falling back to
    the installed distribution; the commit from git when run from a checkout.
    """
    logger = get_logger()
    version = "unknown"
    commit = "unknown"

    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        logger.trace("trying to read metadata from %s", pyproject)
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)
    else:
        from importlib.metadata import PackageNotFoundError  # noqa: PLC0415
        from importlib.metadata import version as dist_version  # noqa: PLC0415

        with suppress(PackageNotFoundError):
            version = dist_version(PROGRAM_SCRIPT)

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        logger.trace("no git commit available for %s", root)

    logger.trace("got package version %s with commit %s", version, commit)
    return Metadata(version, commit)


SELFTEST_FILES = {
    "package.json": json.dumps({"name": "selftest", "version": "1.0.0"}),
    "src/wrapper.js": (
        "/*! selftest v@VERSION @DATE */\n(function() {\n// @CODE\n})();\n"
    ),
    "src/jquery.js": 'define( [\n\t"./core",\n\t"./extra"\n], function( jQuery ) {\n'
    '"use strict";\nreturn jQuery;\n} );\n',
    "src/core.js": 'define( [\n\t"./var/answer"\n], function( answer ) {\n'
    '"use strict";\nvar jQuery = { answer: answer };\nreturn jQuery;\n} );\n',
    "src/var/answer.js": 'define( function() {\n\t"use strict";\n\treturn 42;\n} );\n',
    "src/extra.js": 'define( [\n\t"./core"\n], function( jQuery ) {\n'
    '"use strict";\njQuery.extra = true;\n} );\n',
}


def _selftest_build_level() -> str:
    """Build chatter stays hidden unless debugging."""
    level = get_log_level()
    if level in ("trace", "debug"):
        return level
    return max(level, "warning", key=LEVEL_ORDER.index)


def run_selftest() -> bool:
    """Build a throwaway source tree and check the bundle that comes out."""
    logger = get_logger()
    logger.info("🧪 Running self-test...")

    tmp_dir: Path | None = None
    try:
        tmp_dir = Path(tempfile.mkdtemp(prefix=f"{PROGRAM_SCRIPT}-selftest-"))
        for rel, text in SELFTEST_FILES.items():
            path = tmp_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

        context = load_build_context(tmp_dir)
        logger.debug("[SELFTEST] using temp dir: %s", tmp_dir)

        with temporary_log_level(_selftest_build_level()):
            dest = asyncio.run(
                build({"version": "1.0.0", "exclude": ["extra"]}, context=context)
            )

        text = dest.read_text(encoding="utf-8")
        if (
            "var answer = 42;" in text
            and "jQuery.extra" not in text
            and "selftest v1.0.0 -extra" in text
            and dest.with_name("jquery.min.js").exists()
        ):
            logger.info("✅ Self-test passed, %s is working correctly.", PROGRAM_DISPLAY)
            return True

        logger.error("Self-test failed: bundle content is not as expected.")
        return False

    except PermissionError:
        logger.error("Self-test failed: insufficient permissions.")  # noqa: TRY400
        return False
    except FileNotFoundError:
        logger.error("Self-test failed: missing file or directory.")  # noqa: TRY400
        return False
    except Exception:
        # Unexpected bug: show traceback and ask for a bug report
        logger.exception(
            "Unexpected self-test failure. "
            "Please report this issue with the following traceback:"
        )
        return False

    finally:
        if tmp_dir and tmp_dir.exists():
            shutil.rmtree(tmp_dir, ignore_errors=True)
