"""Run external ROS tools and capture their output."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping

from rosws.errors import CommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs commands in a given environment (None = inherit the current one)."""

    def __init__(self, env: Mapping[str, str] | None = None, timeout: float | None = None) -> None:
        self.env = dict(env) if env is not None else None
        self.timeout = timeout

    def run(self, args: list[str]) -> str:
        """
        Run args without a shell and return stdout.

        Raises CommandError if the executable is missing, exits non-zero or
        times out.
        """
        logger.debug("Executing: %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                env=self.env,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CommandError(args, None, f"Command not found: {args[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(args, None, f"Timed out after {self.timeout}s") from e
        if result.returncode != 0:
            raise CommandError(args, result.returncode, result.stderr or "")
        return result.stdout


def split_lines(output: str) -> list[str]:
    """Non-empty stripped lines of command output."""
    return [line.strip() for line in output.splitlines() if line.strip()]
