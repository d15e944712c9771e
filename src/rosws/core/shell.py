"""Interactive shell with the ROS environment."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping

logger = logging.getLogger(__name__)


def open_shell(env: Mapping[str, str], shell: str | None = None) -> int:
    """Run an interactive shell ($SHELL, else bash) in env and return its exit code."""
    if shell is None:
        shell = env.get("SHELL") or "bash"
    logger.debug("Opening ROS shell: %s", shell)
    return subprocess.call([shell], env=dict(env))
