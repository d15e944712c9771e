"""Read compiler include directories from the Code::Blocks project generated by catkin."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from rosws.config import PROJECT_FILE
from rosws.errors import MalformedProjectFileError, WorkspaceNotBuiltError

logger = logging.getLogger(__name__)

ROOT_TAG = "CodeBlocks_project_file"
# Option type of targets that build a workspace package (tests and utilities differ).
PACKAGE_TARGET_TYPE = "1"
DEFAULT_TARGET_TYPE = "0"


@dataclass
class Target:
    """One <Target> of the project's <Build> section."""

    title: str
    options: list[dict[str, str]] = field(default_factory=list)
    # None when the target has no <Compiler> block at all
    compiler_entries: list[dict[str, str]] | None = None

    @property
    def target_type(self) -> str:
        """Type from the last option that declares one; later options override earlier ones."""
        target_type = DEFAULT_TARGET_TYPE
        for option in self.options:
            if "type" in option:
                target_type = option["type"]
        return target_type

    @property
    def is_package(self) -> bool:
        return self.target_type == PACKAGE_TARGET_TYPE

    @property
    def include_dirs(self) -> list[str]:
        """Non-empty directory attributes of the compiler <Add> entries, in order."""
        if not self.compiler_entries:
            return []
        return [entry["directory"] for entry in self.compiler_entries if entry.get("directory")]


@dataclass
class ProjectDocument:
    """Targets of a parsed project file, in document order."""

    targets: list[Target] = field(default_factory=list)


def _parse_target(element: ET.Element) -> Target:
    options = [dict(option.attrib) for option in element.findall("Option")]
    compiler = element.find("Compiler")
    entries = None
    if compiler is not None:
        entries = [dict(add.attrib) for add in compiler.findall("Add")]
    return Target(
        title=element.get("title", ""),
        options=options,
        compiler_entries=entries,
    )


def parse_project_file(data: bytes, path: Path | None = None) -> ProjectDocument:
    """
    Parse the contents of a Project.cbp file.

    Raises MalformedProjectFileError if data is not well-formed XML or does not
    have the CodeBlocks_project_file/Project/Build layout. A Build section
    without targets is valid and gives an empty document.
    """
    # An unknown encoding declaration raises LookupError, undecodable bytes ValueError
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise MalformedProjectFileError(path, str(e)) from e
    if root.tag != ROOT_TAG:
        raise MalformedProjectFileError(path, f"unexpected root element <{root.tag}>")
    project = root.find("Project")
    if project is None:
        raise MalformedProjectFileError(path, "missing <Project> element")
    build = project.find("Build")
    if build is None:
        raise MalformedProjectFileError(path, "missing <Build> element")
    return ProjectDocument(targets=[_parse_target(t) for t in build.findall("Target")])


def collect_include_dirs(document: ProjectDocument) -> list[str]:
    """
    Include directories of all package targets that declare compiler settings.

    Order follows the document; a directory seen again later is not repeated.
    """
    includes: list[str] = []
    for target in document.targets:
        # Tests and other non-package targets are skipped
        if not target.is_package:
            continue
        if target.compiler_entries is None:
            continue
        for directory in target.include_dirs:
            if directory not in includes:
                includes.append(directory)
    return includes


def get_include_dirs(base_dir: Path | str) -> list[str]:
    """
    Get the compiler include directories of a built catkin workspace.

    Reads <base_dir>/build/Project.cbp, which catkin generates when the workspace
    is built with the Code::Blocks generator.

    Raises:
        WorkspaceNotBuiltError: the project file is missing or cannot be read.
        MalformedProjectFileError: the file is not a valid project file.
    """
    project_file = Path(base_dir) / PROJECT_FILE
    try:
        data = project_file.read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", project_file, e)
        raise WorkspaceNotBuiltError(project_file) from e

    document = parse_project_file(data, project_file)
    includes = collect_include_dirs(document)
    logger.debug(
        "Found %d include dir(s) in %d target(s) of %s",
        len(includes),
        len(document.targets),
        project_file,
    )
    return includes
