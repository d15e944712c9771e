"""Tests for the WorkspaceApp TUI, driven headless with App.run_test()."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from unittest import mock

from textual.widgets import Tree

from rosws.config import RosWsConfig
from rosws.errors import CommandError
from rosws.tui.app import WorkspaceApp

PROJECT = (
    "<CodeBlocks_project_file><Project><Build>"
    '<Target title="my_pkg"><Option type="1" /><Compiler>'
    '<Add directory="/ws/src/my_pkg/include" /></Compiler></Target>'
    "</Build></Project></CodeBlocks_project_file>"
)
PACKAGES = {"my_pkg": "/ws/src/my_pkg", "roscpp": "/opt/ros/noetic/share/roscpp"}


async def _wait_until(pilot, condition: Callable[[], bool], timeout: float = 5.0) -> None:
    for _ in range(int(timeout / 0.05)):
        if condition():
            return
        await pilot.pause(0.05)
    raise AssertionError("Timed out waiting for the app")


def _run(app: WorkspaceApp, scenario: Callable[[WorkspaceApp, object], Awaitable[None]]) -> None:
    async def runner() -> None:
        async with app.run_test() as pilot:
            await scenario(app, pilot)

    asyncio.run(runner())


def _section_labels(app: WorkspaceApp) -> list[str]:
    tree = app.query_one("#ws_tree", Tree)
    return [str(child.label) for child in tree.root.children]


def _package_names(app: WorkspaceApp) -> list[str]:
    tree = app.query_one("#ws_tree", Tree)
    packages = tree.root.children[1]
    return [child.data for child in packages.children]


def _app(base_dir: Path) -> WorkspaceApp:
    return WorkspaceApp(config=RosWsConfig(base_dir=base_dir))


def _built(tmp_path: Path) -> Path:
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "Project.cbp").write_text(PROJECT)
    return tmp_path


class TestPackageScan:
    """Tests for the background package scan."""

    def test_success_fills_tree(self, tmp_path: Path) -> None:
        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            await pilot.pause()
            labels = _section_labels(app)
            assert labels[0] == "Include directories (1)"
            assert labels[1] == "Packages (2)"
            assert _package_names(app) == ["my_pkg", "roscpp"]
            assert app._packages_error is None

        with mock.patch("rosws.tui.app.build_environment", return_value={"A": "1"}), mock.patch(
            "rosws.tui.app.get_packages", return_value=PACKAGES
        ) as get_packages:
            _run(_app(_built(tmp_path)), scenario)
        get_packages.assert_called_once_with({"A": "1"})

    def test_rospack_missing_keeps_app_running(self, tmp_path: Path) -> None:
        error = CommandError(["rospack", "list"], None, "Command not found: rospack")

        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            await pilot.pause()
            assert app.is_running
            assert app._packages == {}
            assert "Command not found: rospack" in app._packages_error
            assert "Error listing packages" in app._details_text
            assert _section_labels(app)[1] == "Packages (0)"

        with mock.patch("rosws.tui.app.build_environment", return_value={}), mock.patch(
            "rosws.tui.app.get_packages", side_effect=error
        ):
            app = _app(_built(tmp_path))
            _run(app, scenario)
        assert not app.return_code

    def test_setup_script_failure(self, tmp_path: Path) -> None:
        error = CommandError(["bash", "-c", "source x && env"], 1, "no such file")

        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            assert app.is_running
            assert "no such file" in app._packages_error

        with mock.patch("rosws.tui.app.build_environment", side_effect=error):
            _run(_app(_built(tmp_path)), scenario)

    def test_not_built_workspace(self, tmp_path: Path) -> None:
        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            await pilot.pause()
            label = _section_labels(app)[0]
            assert "Please build the workspace first." in label
            assert _package_names(app) == ["my_pkg", "roscpp"]

        with mock.patch("rosws.tui.app.build_environment", return_value={}), mock.patch(
            "rosws.tui.app.get_packages", return_value=PACKAGES
        ):
            _run(_app(tmp_path), scenario)


class TestPackageDetails:
    """Tests for the package lookup worker."""

    def test_shows_executables_and_launch_files(self, tmp_path: Path) -> None:
        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            app._show_package("my_pkg")
            await _wait_until(pilot, lambda: "Executables" in app._details_text)
            assert "/ws/src/my_pkg" in app._details_text
            assert "/ws/devel/lib/my_pkg/node" in app._details_text
            assert "demo.launch" in app._details_text

        with mock.patch("rosws.tui.app.build_environment", return_value={}), mock.patch(
            "rosws.tui.app.get_packages", return_value=PACKAGES
        ), mock.patch(
            "rosws.tui.app.find_package_executables", return_value=["/ws/devel/lib/my_pkg/node"]
        ), mock.patch(
            "rosws.tui.app.find_package_launch_files",
            return_value=["/ws/src/my_pkg/launch/demo.launch"],
        ):
            _run(_app(_built(tmp_path)), scenario)

    def test_lookup_error_shown_in_details(self, tmp_path: Path) -> None:
        error = CommandError(["catkin_find"], None, "Command not found: catkin_find")

        async def scenario(app: WorkspaceApp, pilot) -> None:
            await _wait_until(pilot, lambda: app._packages is not None)
            app._show_package("my_pkg")
            await _wait_until(pilot, lambda: "Error:" in app._details_text)
            assert "Command not found: catkin_find" in app._details_text
            assert app.is_running

        with mock.patch("rosws.tui.app.build_environment", return_value={}), mock.patch(
            "rosws.tui.app.get_packages", return_value=PACKAGES
        ), mock.patch("rosws.tui.app.find_package_executables", side_effect=error):
            _run(_app(_built(tmp_path)), scenario)
