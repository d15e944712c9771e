"""Errors raised by rosws. Library code raises these; the CLI and TUI display them."""

from __future__ import annotations

from pathlib import Path


class RosWsError(Exception):
    """Base class for errors with a message meant to be shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WorkspaceNotBuiltError(RosWsError):
    """The generated project file is missing or unreadable."""

    def __init__(self, path: Path) -> None:
        super().__init__("Please build the workspace first.")
        self.path = path


class MalformedProjectFileError(RosWsError):
    """The project file exists but is not valid XML or not a Code::Blocks project."""

    def __init__(self, path: Path | None, detail: str) -> None:
        where = f" {path}" if path is not None else ""
        super().__init__(f"Malformed project file{where}: {detail}")
        self.path = path
        self.detail = detail


class CommandError(RosWsError):
    """An external command (rospack, catkin_find, bash) failed."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = "") -> None:
        cmd = " ".join(command)
        if returncode is None:
            message = f"Command failed: {cmd}"
        else:
            message = f"Command failed with exit code {returncode}: {cmd}"
        stderr = stderr.strip()
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
