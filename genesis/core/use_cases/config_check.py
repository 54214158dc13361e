"""
Config check use case — validate genesis.json and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from genesis.core.config.loader import ConfigError
from genesis.core.config.settings import load_settings
from genesis.core.models.workspace import PREMAKE_LIBRARY
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.hierarchy import FlatWorkspace, flatten


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    workspace: FlatWorkspace | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "workspace_name": self.workspace.name if self.workspace else None,
            "project_count": len(self.workspace.projects) if self.workspace else 0,
            "module_count": len(self.workspace.modules) if self.workspace else 0,
        }


def check_config(root: Path | None = None) -> ConfigCheckResult:
    """Validate workspace configuration and report issues.

    Args:
        root: Directory to look for genesis.json from (default: cwd).

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()
    store = WorkspaceStore.discover(root)
    result.config_path = store.path

    # Load, validate and flatten
    try:
        flat = flatten(store.load())
        result.workspace = flat
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    try:
        load_settings(store.root)
    except ConfigError as e:
        result.errors.append(str(e))

    # Semantic checks
    if not flat.projects:
        result.warnings.append("No projects defined. Run 'genesis project' to add one.")

    known = flat.known_ids()
    for pid, project in flat.projects.items():
        for dep in project.dependencies:
            if dep not in known:
                result.warnings.append(f"Project '{pid}' depends on unknown '{dep}'")
            elif dep == pid:
                result.warnings.append(f"Project '{pid}' depends on itself")

    for mid, module in flat.modules.items():
        for dep in module.dependencies:
            if dep not in known:
                result.warnings.append(f"Module '{mid}' depends on unknown '{dep}'")
        if module.type != PREMAKE_LIBRARY:
            result.warnings.append(f"Module '{mid}' has unsupported type '{module.type}'")
        if module.packet is not None:
            if not module.packet.is_git_clone:
                result.warnings.append(
                    f"Module '{mid}' has unsupported packet type '{module.packet.type}'; "
                    "it will be skipped by install"
                )
            elif not module.packet.repo:
                result.errors.append(f"Module '{mid}' git-clone packet has no repo")
        if module.library is not None and module.library.type != PREMAKE_LIBRARY:
            result.warnings.append(
                f"Module '{mid}' has unsupported library type '{module.library.type}'"
            )

    # Result
    result.valid = len(result.errors) == 0
    return result
