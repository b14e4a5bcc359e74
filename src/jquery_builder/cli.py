# src/jquery_builder/cli.py

import argparse
import asyncio
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from .actions import get_metadata, run_selftest
from .build import build, build_default_files
from .config import determine_log_level, find_config, load_build_context, load_config
from .constants import DEFAULT_FILENAME
from .meta import DESCRIPTION, PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .runtime import current_runtime
from .types import BuildOptionsInput, ProjectConfig
from .utils import safe_log
from .utils_logs import LEVEL_ORDER, get_logger, set_log_level


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # Argparse message for bad flags is typically
        # "unrecognized arguments: --exlude ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    # --- Build descriptor ---
    parser.add_argument(
        "--amd",
        nargs="?",
        const="",
        default=None,
        metavar="NAME",
        help="Set the AMD module name. Pass no name for an anonymous define.",
    )
    parser.add_argument("-d", "--dir", help="Output directory (default: dist).")
    parser.add_argument(
        "-f",
        "--filename",
        help=f"Output file name (default: {DEFAULT_FILENAME}).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        nargs="+",
        action="extend",
        default=[],
        metavar="MODULE",
        help="Modules to leave out, e.g. ajax css/showHide.",
    )
    parser.add_argument(
        "-i",
        "--include",
        nargs="+",
        action="extend",
        default=[],
        metavar="MODULE",
        help="Build with only these modules (and their dependencies).",
    )
    parser.add_argument(
        "-s",
        "--slim",
        action="store_true",
        help="Build the slim variant (no ajax, callbacks, deferred, effects, queue).",
    )
    parser.add_argument(
        "--build-version",
        metavar="VERSION",
        help="Version to embed. Defaults to package.json's version plus the commit.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Build the standard and slim variants and compare their sizes.",
    )

    # --- Project ---
    parser.add_argument("-c", "--config", help="Path to the builder config file.")
    parser.add_argument(
        "--root",
        default=None,
        help="Project root holding package.json and src/ (default: cwd).",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    parser.add_argument(
        "--selftest",
        action="store_true",
        help="Run a built-in sanity test to verify tool correctness.",
    )
    return parser


def _build_options(args: argparse.Namespace) -> BuildOptionsInput:
    options: BuildOptionsInput = {
        "amd": args.amd,
        "exclude": args.exclude,
        "include": args.include,
        "slim": args.slim,
        "version": args.build_version,
    }
    if args.dir:
        options["dir"] = args.dir
    if args.filename:
        options["filename"] = args.filename
    return options


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:  # noqa: C901, PLR0911
    logger = get_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        set_log_level(determine_log_level(args))
        if args.use_color is not None:
            current_runtime["use_color"] = args.use_color
        logger.trace("[BOOT] log-level initialized: %s", current_runtime["log_level"])

        logger.debug(
            "Runtime: Python %s (%s)\n    %s",
            platform.python_version(),
            platform.python_implementation(),
            sys.version.replace("\n", " "),
        )

        # --- Version flag ---
        if args.version:
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        # --- Self-test mode ---
        if args.selftest:
            return 0 if run_selftest() else 1

        # --- Load configuration ---
        root = Path(args.root).resolve() if args.root else Path.cwd().resolve()
        config_path = find_config(args.config, root)
        project_cfg: ProjectConfig = load_config(config_path) if config_path else {}
        if not args.log_level:
            set_log_level(determine_log_level(args, project_cfg.get("log_level")))
        if config_path:
            logger.info("🔧 Using config: %s", config_path.name)

        context = load_build_context(root, project_cfg)

        # --- Build ---
        if args.all:
            if args.exclude or args.include or args.slim or args.filename:
                logger.warning(
                    "--all builds the default variants;"
                    " module and file flags are ignored."
                )
            asyncio.run(
                build_default_files(context=context, version=args.build_version)
            )
        else:
            asyncio.run(build(_build_options(args), context=context))

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        try:
            logger.error_if_not_debug(str(e))
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical_if_not_debug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0


def main_entry() -> None:
    """Console-script wrapper: exit with main()'s return code."""
    sys.exit(main())
