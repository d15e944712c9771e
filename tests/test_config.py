"""Tests for rosws.config module."""

from __future__ import annotations

from pathlib import Path

from rosws.config import DEFAULT_ROS_ROOT, RosWsConfig, load_config


class TestRosWsConfig:
    """Tests for RosWsConfig derived paths."""

    def test_paths(self) -> None:
        config = RosWsConfig(base_dir=Path("/ws"), distro="noetic")
        assert config.project_file == Path("/ws/build/Project.cbp")
        assert config.distro_setup_file == Path("/opt/ros/noetic/setup.bash")
        assert config.workspace_setup_file == Path("/ws/devel/setup.bash")

    def test_no_distro(self) -> None:
        assert RosWsConfig(base_dir=Path("/ws")).distro_setup_file is None

    def test_to_dict(self) -> None:
        d = RosWsConfig(base_dir=Path("/ws"), distro="", ros_root=Path("/ros")).to_dict()
        assert d["base_dir"] == "/ws"
        assert d["ros_root"] == "/ros"
        assert d["distro_setup_file"] is None
        assert d["project_file"] == "/ws/build/Project.cbp"


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config({})
        assert config.base_dir == tmp_path.resolve()
        assert config.distro == ""
        assert config.ros_root == DEFAULT_ROS_ROOT

    def test_from_environment(self, tmp_path: Path) -> None:
        config = load_config(
            {
                "ROSWS_BASE_DIR": str(tmp_path),
                "ROS_DISTRO": "noetic",
                "ROSWS_ROS_ROOT": "/custom/ros",
            }
        )
        assert config.base_dir == tmp_path.resolve()
        assert config.distro == "noetic"
        assert config.ros_root == Path("/custom/ros")

    def test_ros_workspace_fallback(self, tmp_path: Path) -> None:
        config = load_config({"ROS_WORKSPACE": str(tmp_path)})
        assert config.base_dir == tmp_path.resolve()

    def test_rosws_base_dir_wins(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        config = load_config({"ROSWS_BASE_DIR": str(tmp_path), "ROS_WORKSPACE": str(other)})
        assert config.base_dir == tmp_path.resolve()

    def test_arguments_override_environment(self, tmp_path: Path) -> None:
        config = load_config(
            {"ROSWS_BASE_DIR": "/elsewhere", "ROS_DISTRO": "melodic"},
            base_dir=tmp_path,
            distro="noetic",
        )
        assert config.base_dir == tmp_path.resolve()
        assert config.distro == "noetic"
