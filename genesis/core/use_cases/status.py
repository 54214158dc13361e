"""
Status use case — summarise the workspace: projects, modules, generators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from genesis.core.config.loader import ConfigError
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.generators import list_generators
from genesis.core.services.hierarchy import FlatWorkspace, flatten
from genesis.core.services.packets import MODULES_DIR


@dataclass
class StatusResult:
    """Aggregated workspace status."""

    workspace: FlatWorkspace | None = None
    workspace_root: Path | None = None
    config_path: Path | None = None
    error: str | None = None

    # module id -> whether .genesis/modules/<id> is populated
    installed: dict[str, bool] = field(default_factory=dict)
    generators: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {}
        if self.error or self.workspace is None:
            result["error"] = self.error or "No workspace"
            return result

        result["workspace"] = {
            "name": self.workspace.name,
            "root": str(self.workspace_root),
            "config_path": str(self.config_path),
        }
        result["projects"] = [
            {
                "id": pid,
                "type": project.type,
                "hide": project.hide,
                "runnable": project.is_runnable and not project.hide,
                "dependencies": project.dependencies,
            }
            for pid, project in self.workspace.projects.items()
        ]
        result["modules"] = [
            {
                "id": mid,
                "type": module.type,
                "packet": module.packet.type if module.packet else None,
                "installed": self.installed.get(mid, False),
            }
            for mid, module in self.workspace.modules.items()
        ]
        result["generators"] = [
            {"name": name, "description": desc} for name, desc in self.generators
        ]
        return result


def get_status(root: Path | None = None) -> StatusResult:
    """Get the status of the workspace at (or above) *root*."""
    result = StatusResult(generators=list_generators())
    store = WorkspaceStore.discover(root)
    result.workspace_root = store.root
    result.config_path = store.path

    try:
        result.workspace = flatten(store.load())
    except ConfigError as e:
        result.error = str(e)
        return result

    for mid in result.workspace.modules:
        target = store.root / MODULES_DIR / mid
        result.installed[mid] = target.is_dir() and any(target.iterdir())

    return result
