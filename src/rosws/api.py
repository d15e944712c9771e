"""Public API: use rosws from Python or from other tools."""

from __future__ import annotations

from collections.abc import Mapping

from rosws.config import RosWsConfig, load_config
from rosws.core.environment import build_environment, get_distros, source_setup_file
from rosws.core.packages import (
    find_package_executables,
    find_package_launch_files,
    get_packages,
)
from rosws.core.project import get_include_dirs


def workspace_include_dirs(config: RosWsConfig | None = None) -> list[str]:
    """
    Include directories of the configured workspace.

    Uses load_config() when config is None. Raises WorkspaceNotBuiltError if
    the workspace has not been built yet, MalformedProjectFileError if
    build/Project.cbp cannot be parsed.
    """
    if config is None:
        config = load_config()
    return get_include_dirs(config.base_dir)


def ros_environment(config: RosWsConfig | None = None) -> dict[str, str]:
    """The environment with the distro and workspace setup scripts sourced."""
    if config is None:
        config = load_config()
    return build_environment(config)


def package_details(
    package_name: str,
    env: Mapping[str, str] | None = None,
) -> dict[str, list[str]]:
    """Executables and launch files of a package."""
    return {
        "executables": find_package_executables(package_name, env),
        "launch_files": find_package_launch_files(package_name, env),
    }


__all__ = [
    "RosWsConfig",
    "load_config",
    "build_environment",
    "get_distros",
    "source_setup_file",
    "find_package_executables",
    "find_package_launch_files",
    "get_packages",
    "get_include_dirs",
    "workspace_include_dirs",
    "ros_environment",
    "package_details",
]
