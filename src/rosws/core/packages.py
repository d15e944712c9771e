"""Query ROS packages through rospack and catkin_find."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from rosws.core.runner import CommandRunner, split_lines

logger = logging.getLogger(__name__)


def _runner(env: Mapping[str, str] | None, runner: CommandRunner | None) -> CommandRunner:
    return runner if runner is not None else CommandRunner(env=env)


def get_packages(
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> dict[str, str]:
    """
    Map package names to their paths using `rospack list`.

    Each output line is "<name> <path>"; the path may itself contain spaces.
    """
    output = _runner(env, runner).run(["rospack", "list"])
    packages: dict[str, str] = {}
    for line in split_lines(output):
        name, _sep, path = line.partition(" ")
        packages[name] = path.strip()
    logger.debug("rospack list returned %d package(s)", len(packages))
    return packages


def _catkin_find_dirs(package_name: str, runner: CommandRunner, *, libexec: bool) -> list[Path]:
    args = ["catkin_find", "--without-underlays"]
    if libexec:
        args.append("--libexec")
    args.extend(["--share", package_name])
    return [Path(line) for line in split_lines(runner.run(args))]


def _walk_files(dirs: list[Path], predicate: Callable[[Path], bool]) -> list[str]:
    """Regular files (not symlinks) under dirs matching predicate, per dir in walk order."""
    found: list[str] = []
    for directory in dirs:
        if not directory.is_dir():
            continue
        for root, subdirs, files in os.walk(directory):
            subdirs.sort()
            for name in sorted(files):
                path = Path(root) / name
                if path.is_symlink() or not path.is_file():
                    continue
                if predicate(path):
                    found.append(str(path))
    return found


def _is_executable(path: Path) -> bool:
    return os.access(path, os.X_OK)


def _is_launch_file(path: Path) -> bool:
    return fnmatch.fnmatch(path.name, "*.launch")


def find_package_executables(
    package_name: str,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> list[str]:
    """Full paths of the executables in a package's libexec and share directories."""
    dirs = _catkin_find_dirs(package_name, _runner(env, runner), libexec=True)
    executables = _walk_files(dirs, _is_executable)
    logger.debug("Found %d executable(s) for %s", len(executables), package_name)
    return executables


def find_package_launch_files(
    package_name: str,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> list[str]:
    """Full paths of the `.launch` files in a package's share directory."""
    dirs = _catkin_find_dirs(package_name, _runner(env, runner), libexec=False)
    launch_files = _walk_files(dirs, _is_launch_file)
    logger.debug("Found %d launch file(s) for %s", len(launch_files), package_name)
    return launch_files
