"""Workspace configuration read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ROS_ROOT = Path("/opt/ros")
PROJECT_FILE = Path("build") / "Project.cbp"
SETUP_SCRIPT = "setup.bash"


@dataclass
class RosWsConfig:
    """Where the workspace lives and which ROS distro to source."""

    base_dir: Path
    distro: str = ""
    ros_root: Path = DEFAULT_ROS_ROOT

    @property
    def project_file(self) -> Path:
        """Code::Blocks project generated by the catkin build."""
        return self.base_dir / PROJECT_FILE

    @property
    def distro_setup_file(self) -> Path | None:
        if not self.distro:
            return None
        return self.ros_root / self.distro / SETUP_SCRIPT

    @property
    def workspace_setup_file(self) -> Path:
        return self.base_dir / "devel" / SETUP_SCRIPT

    def to_dict(self) -> dict:
        """Serialize to dict for JSON output."""
        distro_setup = self.distro_setup_file
        return {
            "base_dir": str(self.base_dir),
            "distro": self.distro,
            "ros_root": str(self.ros_root),
            "project_file": str(self.project_file),
            "distro_setup_file": str(distro_setup) if distro_setup else None,
            "workspace_setup_file": str(self.workspace_setup_file),
        }


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    base_dir: Path | str | None = None,
    distro: str | None = None,
) -> RosWsConfig:
    """
    Build a RosWsConfig from environment variables.

    Lookup order for the workspace: the base_dir argument, ROSWS_BASE_DIR,
    ROS_WORKSPACE, then the current directory. The distro comes from the
    distro argument or ROS_DISTRO; the install root from ROSWS_ROS_ROOT.
    """
    if environ is None:
        environ = os.environ

    if base_dir is None:
        raw = environ.get("ROSWS_BASE_DIR") or environ.get("ROS_WORKSPACE") or ""
        base_dir = raw.strip() or Path.cwd()
    if distro is None:
        distro = environ.get("ROS_DISTRO", "").strip()
    ros_root = environ.get("ROSWS_ROS_ROOT", "").strip()

    return RosWsConfig(
        base_dir=Path(base_dir).expanduser().resolve(),
        distro=distro,
        ros_root=Path(ros_root).expanduser() if ros_root else DEFAULT_ROS_ROOT,
    )
