"""Source ROS setup scripts and discover installed distros."""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Callable, Mapping
from pathlib import Path

from rosws.config import DEFAULT_ROS_ROOT, RosWsConfig
from rosws.core.runner import CommandRunner

logger = logging.getLogger(__name__)


def _parse_env_output(output: str) -> dict[str, str]:
    """Parse `env` output: KEY=VALUE per line, split at the first '='."""
    env: dict[str, str] = {}
    for line in output.split("\n"):
        index = line.find("=")
        if index != -1:
            env[line[:index]] = line[index + 1 :]
    return env


def source_setup_file(
    filename: Path | str,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> dict[str, str]:
    """
    Source a setup file in bash and return the resulting environment.

    env is the environment the script is sourced in (default: the current one).
    Raises CommandError if bash fails, e.g. when the file does not exist.
    """
    if runner is None:
        runner = CommandRunner(env=env)
    command = f"source {shlex.quote(str(filename))} && env"
    result = _parse_env_output(runner.run(["bash", "-c", command]))
    logger.debug("Sourced %s (%d variables)", filename, len(result))
    return result


def get_distros(ros_root: Path | str = DEFAULT_ROS_ROOT) -> list[str]:
    """Names of the ROS distros installed under ros_root (e.g. /opt/ros)."""
    root = Path(ros_root)
    if not root.is_dir():
        return []
    return sorted(child.name for child in root.iterdir() if child.is_dir())


def build_environment(
    config: RosWsConfig,
    *,
    base_env: Mapping[str, str] | None = None,
    runner_factory: Callable[..., CommandRunner] = CommandRunner,
) -> dict[str, str]:
    """
    Build the ROS environment for a workspace.

    Sources the distro setup.bash (if a distro is configured and installed), then
    the workspace devel/setup.bash (if the workspace has been built). Scripts that
    do not exist are skipped; the starting environment is returned unchanged when
    neither exists.
    """
    env = dict(os.environ if base_env is None else base_env)
    for setup_file in (config.distro_setup_file, config.workspace_setup_file):
        if setup_file is None:
            continue
        if not setup_file.is_file():
            logger.debug("Skipping missing setup file %s", setup_file)
            continue
        env = source_setup_file(setup_file, env, runner=runner_factory(env=env))
    return env
