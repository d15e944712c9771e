"""rosws: helpers for ROS catkin workspaces (library, TUI, CLI)."""

from importlib.metadata import version, PackageNotFoundError

from rosws.api import (
    find_package_executables,
    find_package_launch_files,
    get_distros,
    get_include_dirs,
    get_packages,
    load_config,
    ros_environment,
    source_setup_file,
    workspace_include_dirs,
)
from rosws.errors import (
    CommandError,
    MalformedProjectFileError,
    RosWsError,
    WorkspaceNotBuiltError,
)

__all__ = [
    "find_package_executables",
    "find_package_launch_files",
    "get_distros",
    "get_include_dirs",
    "get_packages",
    "load_config",
    "ros_environment",
    "source_setup_file",
    "workspace_include_dirs",
    "CommandError",
    "MalformedProjectFileError",
    "RosWsError",
    "WorkspaceNotBuiltError",
    "__version__",
]

try:
    __version__ = version("rosws")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
