"""
Install use case — clone the sources of every module with a packet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from genesis.adapters.registry import AdapterRegistry, default_registry
from genesis.core.config.loader import ConfigError
from genesis.core.config.settings import load_settings
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.hierarchy import flatten
from genesis.core.services.packets import InstallReport, install_packets

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of installing module packets."""

    workspace_root: Path | None = None
    report: InstallReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.ok

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            return result
        result["workspace_root"] = str(self.workspace_root)
        if self.report:
            result.update(self.report.to_dict())
        return result


def install_modules(
    root: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> InstallResult:
    """Install every module packet of the workspace at (or above) *root*.

    Args:
        root: Directory to look for genesis.json from (default: cwd).
        registry: Optional pre-configured adapter registry.

    Returns:
        InstallResult; a failed clone makes the result not ok.
    """
    result = InstallResult()
    store = WorkspaceStore.discover(root)
    result.workspace_root = store.root

    try:
        doc = store.load()
        settings = load_settings(store.root)
        flat = flatten(doc)
    except ConfigError as e:
        result.error = str(e)
        return result

    if registry is None:
        registry = default_registry(settings)

    try:
        result.report = install_packets(store.root, flat, registry, settings)
    except OSError as e:
        result.error = f"Cannot prepare module directory: {e}"
        return result

    if result.report.failed:
        result.error = f"Failed to install: {', '.join(result.report.failed)}"
    return result
