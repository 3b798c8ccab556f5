"""Last-commit metadata for a single path, read through ``git log``."""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 2.0


def git_log_field(path: str, fmt: str, *extra: str) -> str:
    """Return ``git log -1 --format=<fmt>`` for *path*, or ``""`` outside a repository."""
    args = ["log", "-1", f"--format={fmt}", *extra, "--", os.path.basename(path)]
    try:
        proc = subprocess.run(
            ["git", "-C", os.path.dirname(path) or ".", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("git log failed for %s: %s", path, exc)
        return ""
    if proc.returncode != 0:
        return ""
    return proc.stdout.strip()


def last_commit_message(path: str) -> str:
    return git_log_field(path, "%s")


def last_committer(path: str) -> str:
    return git_log_field(path, "%an")


def last_commit_time(path: str) -> str:
    return git_log_field(path, "%cd", "--date=relative")
