# src/jquery_builder/vcs.py
"""Git queries used to stamp development builds."""

import asyncio
from pathlib import Path

from .utils_logs import get_logger


class VersionControlError(RuntimeError):
    """A git command failed or git is not available."""


async def _git(*args: str, cwd: Path) -> str:
    logger = get_logger()
    logger.trace("[VCS] git %s (cwd=%s)", " ".join(args), cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        xmsg = "git not available in environment"
        raise VersionControlError(xmsg) from e

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        detail = stderr.decode(errors="replace").strip()
        xmsg = f"git {' '.join(args)} failed ({proc.returncode}): {detail}"
        raise VersionControlError(xmsg)
    return stdout.decode(errors="replace")


async def short_commit_hash(cwd: Path) -> str:
    """Abbreviated hash of HEAD."""
    return (await _git("rev-parse", "--short", "HEAD", cwd=cwd)).strip()


async def is_clean_working_dir(cwd: Path) -> bool:
    """True when tracked files have no staged or unstaged changes."""
    status = await _git("status", "--untracked-files=no", "--porcelain", cwd=cwd)
    return not status.strip()
