"""
Cleaning — remove build output and premake-generated IDE files.

Only things genesis or its tools produce are touched: the output and
intermediate trees, and Visual Studio project/solution files under each
top-level project directory plus solutions at the workspace root.
Sources, override stubs and installed modules stay.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from genesis.core.config.settings import ToolSettings
from genesis.core.models.workspace import WorkspaceDocument

logger = logging.getLogger(__name__)

GENERATED_SUFFIXES = (
    ".vcxproj",
    ".vcxproj.user",
    ".vcxproj.filters",
    ".sln",
)


@dataclass
class CleanReport:
    removed_dirs: list[str] = field(default_factory=list)
    removed_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "removed_dirs": self.removed_dirs,
            "removed_files": self.removed_files,
        }


def is_generated_file(path: Path) -> bool:
    return path.name.endswith(GENERATED_SUFFIXES)


def _remove_generated(directory: Path, root: Path, report: CleanReport, recursive: bool) -> None:
    candidates = directory.rglob("*") if recursive else directory.iterdir()
    for path in sorted(candidates):
        if path.is_file() and is_generated_file(path):
            path.unlink()
            report.removed_files.append(path.relative_to(root).as_posix())


def clean_workspace(
    root: Path,
    doc: WorkspaceDocument,
    settings: ToolSettings | None = None,
) -> CleanReport:
    """Delete build trees and generated project files below *root*.

    Raises:
        OSError: If something cannot be removed.
    """
    settings = settings or ToolSettings()
    report = CleanReport()

    for name in (settings.output_root, settings.intermediate_root):
        target = root / name
        if target.is_dir():
            logger.info("Removing %s/", target)
            shutil.rmtree(target)
            report.removed_dirs.append(f"{name}/")

    for key in doc.projects:
        project_dir = root / key
        if project_dir.is_dir():
            _remove_generated(project_dir, root, report, recursive=True)

    _remove_generated(root, root, report, recursive=False)

    logger.info(
        "Clean: %d directories, %d files removed",
        len(report.removed_dirs), len(report.removed_files),
    )
    return report
