"""Core library: project file parsing, setup script sourcing, package queries."""

from rosws.core.environment import build_environment, get_distros, source_setup_file
from rosws.core.packages import (
    find_package_executables,
    find_package_launch_files,
    get_packages,
)
from rosws.core.project import (
    ProjectDocument,
    Target,
    collect_include_dirs,
    get_include_dirs,
    parse_project_file,
)
from rosws.core.runner import CommandRunner
from rosws.core.shell import open_shell

__all__ = [
    "build_environment",
    "get_distros",
    "source_setup_file",
    "find_package_executables",
    "find_package_launch_files",
    "get_packages",
    "ProjectDocument",
    "Target",
    "collect_include_dirs",
    "get_include_dirs",
    "parse_project_file",
    "CommandRunner",
    "open_shell",
]
