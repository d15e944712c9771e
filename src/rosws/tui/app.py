"""Textual TUI for browsing a ROS workspace: include directories and packages."""

from __future__ import annotations

from functools import partial
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, LoadingIndicator, Static, Tree
from textual.worker import Worker, WorkerState

from rosws.config import RosWsConfig, load_config
from rosws.core.environment import build_environment
from rosws.core.packages import (
    find_package_executables,
    find_package_launch_files,
    get_packages,
)
from rosws.core.project import get_include_dirs
from rosws.errors import RosWsError

WELCOME_BANNER = "[bold cyan]rosws[/bold cyan]"

WELCOME_DESC = """[dim]Browse the packages and include directories of a ROS workspace.
Packages come from rospack in the sourced workspace environment.
Select a package to see its executables and launch files.[/]"""

# Limits to keep the tree responsive
MAX_PACKAGES_SHOWN = 300
MAX_FILES_SHOWN = 40

COLOR_HEADER = "bold magenta"
COLOR_INCLUDE = "bold green"
COLOR_PACKAGE = "bold yellow"
COLOR_PKG = "white"
COLOR_STATS = "cyan"
COLOR_PATH = "dim"

# Worker groups: one package scan, one package lookup at a time
SCAN_GROUP = "scan"
DETAILS_GROUP = "details"


def _filter_packages(packages: dict[str, str], query: str) -> list[str]:
    """Sorted package names containing query (case-insensitive); all names if query is empty."""
    query = query.strip().lower()
    return sorted(name for name in packages if query in name.lower())


def _error_message(error: BaseException | None) -> str:
    if isinstance(error, RosWsError):
        return error.message
    return str(error)


def _include_section_label(includes: list[str] | None, error: str | None) -> str:
    if error:
        return f"[{COLOR_INCLUDE}]Include directories[/] [red]({error})[/]"
    return f"[{COLOR_INCLUDE}]Include directories ({len(includes or [])})[/]"


def _format_file_list(title: str, paths: list[str], limit: int = MAX_FILES_SHOWN) -> list[str]:
    lines = [f"[{COLOR_HEADER}]{title}[/] [{COLOR_STATS}]{len(paths)}[/]"]
    if not paths:
        lines.append("  [dim](none)[/]")
    for path in paths[:limit]:
        lines.append(f"  [{COLOR_PATH}]{path}[/]")
    if len(paths) > limit:
        lines.append(f"  [dim]… and {len(paths) - limit} more[/]")
    return lines


def _format_package_details(
    name: str,
    path: str,
    executables: list[str],
    launch_files: list[str],
) -> str:
    """Details panel text for a package."""
    lines = [
        f"[{COLOR_HEADER}]Package[/]",
        f"  [{COLOR_PKG}]{name}[/]",
        "",
        f"[{COLOR_HEADER}]Path[/]",
        f"  [{COLOR_PATH}]{path or '(n/a)'}[/]",
        "",
    ]
    lines.extend(_format_file_list("Executables", executables))
    lines.append("")
    lines.extend(_format_file_list("Launch files", launch_files))
    return "\n".join(lines)


class FilterScreen(ModalScreen[str | None]):
    """Modal to filter the package list by name. Keyboard-only."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    FilterScreen {
        align: center middle;
        padding: 2 4;
    }
    FilterScreen #filter_title {
        text-align: center;
        padding-bottom: 1;
    }
    FilterScreen #filter_input {
        width: 60;
        margin: 1 0;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._input: Input | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                "[bold cyan]Filter packages[/]\n\n"
                "Type part of a package name. Empty shows all packages.",
                id="filter_title",
                markup=True,
            )
            yield Input(placeholder="package name...", id="filter_input")

    def on_mount(self) -> None:
        self._input = self.query_one("#filter_input", Input)
        self._input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "filter_input":
            return
        self.dismiss(self._input.value.strip() if self._input else "")

    def action_cancel(self) -> None:
        self.dismiss(None)


class WorkspaceApp(App[None]):
    """Terminal UI to explore a ROS catkin workspace."""

    TITLE = "rosws"
    BINDINGS = [
        Binding("/", "filter", "Filter"),
        Binding("d", "toggle_details", "Details"),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #welcome_container {
        align: center middle;
        width: 100%;
        height: 100%;
    }
    #welcome_banner, #welcome_desc, #welcome_hint {
        text-align: center;
        width: 100%;
        padding: 1 4;
    }
    #main_container {
        display: none;
    }
    #details {
        padding: 1 2;
        border: solid $primary;
        height: auto;
        min-height: 8;
    }
    """

    def __init__(self, config: RosWsConfig | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._config = config if config is not None else load_config()
        self._env: dict[str, str] | None = None
        self._packages: dict[str, str] | None = None
        self._packages_error: str | None = None
        self._packages_loading = False
        self._filter = ""
        self._details_visible = True
        self._details_text = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="welcome_container"):
            yield Static(WELCOME_BANNER, id="welcome_banner", markup=True)
            yield Static(WELCOME_DESC, id="welcome_desc", markup=True)
            yield LoadingIndicator()
            yield Static("[dim]Sourcing workspace and listing packages...[/]", id="welcome_hint")
        with Container(id="main_container"):
            yield Tree("Workspace", id="ws_tree")
            yield Static("", id="details")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = str(self._config.base_dir)
        self._start_package_scan()

    def _start_package_scan(self) -> None:
        if self._packages_loading:
            return
        self._packages_loading = True
        self.run_worker(
            self._scan_packages_worker,
            group=SCAN_GROUP,
            thread=True,
            exit_on_error=False,
        )

    def _scan_packages_worker(self) -> dict[str, str]:
        """Worker that sources the workspace and runs rospack in a background thread."""
        if self._env is None:
            self._env = build_environment(self._config)
        return get_packages(self._env)

    def _package_details_worker(self, name: str) -> str:
        """Worker that runs catkin_find and walks the package directories."""
        path = (self._packages or {}).get(name, "")
        executables = find_package_executables(name, self._env)
        launch_files = find_package_launch_files(name, self._env)
        return _format_package_details(name, path, executables, launch_files)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.group == DETAILS_GROUP:
            if event.state == WorkerState.SUCCESS:
                self._set_details(event.worker.result)
            elif event.state == WorkerState.ERROR:
                self._set_details(f"[red]Error: {_error_message(event.worker.error)}[/]")
            return
        if event.state == WorkerState.SUCCESS:
            self._packages = event.worker.result
            self._packages_error = None
        elif event.state == WorkerState.ERROR:
            self._packages = {}
            self._packages_error = _error_message(event.worker.error)
        else:
            return
        self._packages_loading = False
        self._show_main()

    def _show_main(self) -> None:
        self.query_one("#welcome_container").styles.display = "none"
        self.query_one("#main_container").styles.display = "block"
        self._populate_tree()

    def _populate_tree(self) -> None:
        tree = self.query_one("#ws_tree", Tree)
        tree.clear()
        tree.root.label = f"[{COLOR_HEADER}]{self._config.base_dir}[/]"
        tree.root.expand()

        includes: list[str] | None = None
        include_error: str | None = None
        try:
            includes = get_include_dirs(self._config.base_dir)
        except RosWsError as e:
            include_error = e.message
        include_node = tree.root.add(_include_section_label(includes, include_error), expand=False)
        for directory in includes or []:
            include_node.add_leaf(f"[{COLOR_PATH}]{directory}[/]")

        packages = self._packages or {}
        names = _filter_packages(packages, self._filter)
        suffix = f" matching '{self._filter}'" if self._filter else ""
        package_node = tree.root.add(
            f"[{COLOR_PACKAGE}]Packages ({len(names)}{suffix})[/]",
            expand=True,
        )
        for name in names[:MAX_PACKAGES_SHOWN]:
            leaf = package_node.add_leaf(f"[{COLOR_PKG}]{name}[/]")
            leaf.data = name
        if len(names) > MAX_PACKAGES_SHOWN:
            package_node.add_leaf(f"[dim]… and {len(names) - MAX_PACKAGES_SHOWN} more[/]")

        if self._packages_error:
            self._set_details(f"[red]Error listing packages: {self._packages_error}[/]")
        else:
            self._set_details(
                f"[{COLOR_HEADER}]Workspace[/]\n\n"
                f"Include directories: [{COLOR_STATS}]{len(includes or [])}[/]  ·  "
                f"Packages: [{COLOR_STATS}]{len(packages)}[/]\n\n"
                "[dim]Enter[/] on a package = show executables and launch files  ·  "
                "[dim]/[/] = filter"
            )
        tree.focus()

    def _set_details(self, text: str) -> None:
        self._details_text = text
        self.query_one("#details", Static).update(text)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        name = event.node.data
        if not isinstance(name, str):
            return
        self._show_package(name)

    def _show_package(self, name: str) -> None:
        self._set_details(f"[dim]Looking up {name}...[/]")
        self.run_worker(
            partial(self._package_details_worker, name),
            group=DETAILS_GROUP,
            thread=True,
            exclusive=True,
            exit_on_error=False,
        )

    def action_filter(self) -> None:
        if self._packages is None:
            return
        self.push_screen(FilterScreen(), self._on_filter_done)

    def _on_filter_done(self, query: str | None) -> None:
        if query is None:
            return
        self._filter = query
        self._populate_tree()

    def action_refresh(self) -> None:
        """Re-source the workspace and list packages again."""
        self._env = None
        self._start_package_scan()

    def action_toggle_details(self) -> None:
        self._details_visible = not self._details_visible
        details = self.query_one("#details", Static)
        details.styles.display = "block" if self._details_visible else "none"

    def action_quit(self) -> None:
        self.exit()


def main() -> None:
    """Entry point for the rosws TUI."""
    WorkspaceApp().run()


if __name__ == "__main__":
    main()
