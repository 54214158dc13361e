"""
Clean use case — remove build output and generated IDE files.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from genesis.core.config.loader import ConfigError
from genesis.core.config.settings import load_settings
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.cleaning import CleanReport, clean_workspace


@dataclass
class CleanResult:
    workspace_root: Path | None = None
    report: CleanReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            return result
        result["workspace_root"] = str(self.workspace_root)
        if self.report:
            result.update(self.report.to_dict())
        return result


def clean(root: Path | None = None) -> CleanResult:
    """Clean the workspace at (or above) *root*."""
    result = CleanResult()
    store = WorkspaceStore.discover(root)
    result.workspace_root = store.root

    try:
        doc = store.load()
        settings = load_settings(store.root)
        result.report = clean_workspace(store.root, doc, settings)
    except ConfigError as e:
        result.error = str(e)
    except OSError as e:
        result.error = f"Clean failed: {e}"

    return result
