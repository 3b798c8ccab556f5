from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from collections.abc import Mapping

logger = logging.getLogger(__name__)


def editor_command(path: str, configured: str | None = None, environ: Mapping[str, str] | None = None) -> list[str]:
    """Command line that opens *path*: the configured editor, ``$VISUAL``, ``$EDITOR``, then the desktop opener."""
    env = os.environ if environ is None else environ
    for candidate in (configured, env.get("VISUAL"), env.get("EDITOR")):
        cmd = shlex.split(candidate.strip()) if candidate else []
        if cmd:
            return [*cmd, path]
    opener = "open" if sys.platform == "darwin" else "xdg-open"
    return [opener, path]


def launch_editor(path: str, configured: str | None = None) -> str | None:
    """Run the editor in the foreground. Returns an error message instead of raising."""
    cmd = editor_command(path, configured)
    logger.debug("Launching %s", cmd)
    try:
        subprocess.run(cmd, check=False)  # noqa: S603
    except OSError as exc:
        return f"Failed to launch {cmd[0]}: {exc}"
    return None
