"""Command-line interface for rosws: include dirs, packages, launch files, ROS shell."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rosws import __version__
from rosws.config import RosWsConfig, load_config
from rosws.core.environment import build_environment, get_distros
from rosws.core.packages import (
    find_package_executables,
    find_package_launch_files,
    get_packages,
)
from rosws.core.project import get_include_dirs
from rosws.core.shell import open_shell
from rosws.errors import RosWsError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _config_from_args(args: argparse.Namespace) -> RosWsConfig:
    return load_config(
        base_dir=getattr(args, "base_dir", None),
        distro=getattr(args, "distro", None),
    )


def _print_list(items: list[str], as_json: bool, empty_message: str) -> None:
    if as_json:
        print(json.dumps(items, indent=2))
    elif not items:
        print(empty_message)
    else:
        for item in items:
            print(item)


def cmd_includes(args: argparse.Namespace) -> int:
    """Print the include directories of the workspace's package targets."""
    config = _config_from_args(args)
    includes = get_include_dirs(config.base_dir)
    _print_list(includes, args.json, "No include directories found.")
    return 0


def cmd_distros(args: argparse.Namespace) -> int:
    """List installed ROS distros."""
    config = _config_from_args(args)
    distros = get_distros(config.ros_root)
    _print_list(distros, args.json, f"No ROS distros found in {config.ros_root}.")
    return 0


def cmd_packages(args: argparse.Namespace) -> int:
    """List packages known to rospack."""
    env = build_environment(_config_from_args(args))
    packages = get_packages(env)
    if args.json:
        print(json.dumps(packages, indent=2))
        return 0
    if not packages:
        print("No packages found. Is your ROS environment sourced?")
        return 0
    print(f"Found {len(packages)} package(s):\n")
    for name in sorted(packages):
        if args.verbose:
            print(f"  {name}: {packages[name]}")
        else:
            print(f"  {name}")
    return 0


def cmd_executables(args: argparse.Namespace) -> int:
    """List the executables of a package."""
    env = build_environment(_config_from_args(args))
    executables = find_package_executables(args.package, env)
    _print_list(executables, args.json, f"No executables found for {args.package}.")
    return 0


def cmd_launch(args: argparse.Namespace) -> int:
    """List the launch files of a package."""
    env = build_environment(_config_from_args(args))
    launch_files = find_package_launch_files(args.package, env)
    _print_list(launch_files, args.json, f"No launch files found for {args.package}.")
    return 0


def cmd_env(args: argparse.Namespace) -> int:
    """Print the sourced ROS environment."""
    env = build_environment(_config_from_args(args))
    if args.json:
        print(json.dumps(env, indent=2, sort_keys=True))
    else:
        for key in sorted(env):
            print(f"{key}={env[key]}")
    return 0


def cmd_shell(args: argparse.Namespace) -> int:
    """Open an interactive shell with the ROS environment."""
    env = build_environment(_config_from_args(args))
    return open_shell(env)


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the interactive TUI."""
    from rosws.tui.app import WorkspaceApp

    app = WorkspaceApp(config=_config_from_args(args))
    app.run()
    return app.return_code or 0


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the rosws CLI."""
    parser = argparse.ArgumentParser(
        prog="rosws",
        description="Helpers for ROS catkin workspaces.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-w",
        "--base-dir",
        metavar="PATH",
        help="Workspace root (default: $ROSWS_BASE_DIR, $ROS_WORKSPACE or the current directory)",
    )
    parser.add_argument(
        "--distro",
        help="ROS distro to source from /opt/ros (default: $ROS_DISTRO)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # rosws includes
    includes_parser = subparsers.add_parser(
        "includes",
        help="Show compiler include directories of the workspace",
        description="Read build/Project.cbp and print the include directories of package targets.",
    )
    includes_parser.add_argument("--json", action="store_true", help="Output as JSON")
    includes_parser.set_defaults(func=cmd_includes)

    # rosws distros
    distros_parser = subparsers.add_parser(
        "distros",
        help="List installed ROS distros",
    )
    distros_parser.add_argument("--json", action="store_true", help="Output as JSON")
    distros_parser.set_defaults(func=cmd_distros)

    # rosws packages
    packages_parser = subparsers.add_parser(
        "packages",
        help="List ROS packages (rospack list)",
        description="List packages visible in the sourced ROS environment.",
    )
    packages_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show package paths",
    )
    packages_parser.add_argument("--json", action="store_true", help="Output as JSON")
    packages_parser.set_defaults(func=cmd_packages)

    # rosws executables
    executables_parser = subparsers.add_parser(
        "executables",
        help="List executables of a package",
    )
    executables_parser.add_argument("package", help="Package name")
    executables_parser.add_argument("--json", action="store_true", help="Output as JSON")
    executables_parser.set_defaults(func=cmd_executables)

    # rosws launch
    launch_parser = subparsers.add_parser(
        "launch",
        help="List launch files of a package",
    )
    launch_parser.add_argument("package", help="Package name")
    launch_parser.add_argument("--json", action="store_true", help="Output as JSON")
    launch_parser.set_defaults(func=cmd_launch)

    # rosws env
    env_parser = subparsers.add_parser(
        "env",
        help="Print the ROS environment",
        description="Source the distro and workspace setup scripts and print the result.",
    )
    env_parser.add_argument("--json", action="store_true", help="Output as JSON")
    env_parser.set_defaults(func=cmd_env)

    # rosws shell
    shell_parser = subparsers.add_parser(
        "shell",
        help="Open a shell with the ROS environment",
    )
    shell_parser.set_defaults(func=cmd_shell)

    # rosws tui (default if no command)
    tui_parser = subparsers.add_parser(
        "tui",
        help="Launch the interactive terminal UI",
    )
    tui_parser.set_defaults(func=cmd_tui)

    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    # Default to TUI if no command specified
    if args.command is None:
        args.func = cmd_tui

    try:
        return args.func(args)
    except RosWsError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
