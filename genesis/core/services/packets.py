"""
Packet installation — acquire module sources into ``.genesis/modules``.

Each module with a ``git-clone`` packet is cloned to
``./.genesis/modules/<moduleId>`` through the git adapter. Modules with
no packet, or with a packet kind this version does not understand, are
left alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from genesis.adapters.registry import AdapterRegistry
from genesis.core.config.loader import GENESIS_DIR
from genesis.core.config.settings import ToolSettings
from genesis.core.models.action import Action, Receipt
from genesis.core.services.hierarchy import FlatWorkspace

logger = logging.getLogger(__name__)

MODULES_DIR = f"{GENESIS_DIR}/modules"


def module_destination(module_id: str) -> str:
    """Clone destination of a module, relative to the workspace root."""
    return f"./{MODULES_DIR}/{module_id}"


@dataclass
class InstallReport:
    """What happened to every module during an install."""

    receipts: list[Receipt] = field(default_factory=list)
    installed: list[str] = field(default_factory=list)
    present: list[str] = field(default_factory=list)     # destination already populated
    ignored: list[str] = field(default_factory=list)     # no packet / unknown packet kind
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "installed": self.installed,
            "present": self.present,
            "ignored": self.ignored,
            "failed": self.failed,
            "receipts": [r.model_dump() for r in self.receipts],
        }


def clone_action(module_id: str, repo: str, settings: ToolSettings) -> Action:
    return Action(
        id=f"clone:{module_id}",
        adapter="git",
        name=f"Clone {module_id}",
        params={
            "operation": "clone",
            "repo": repo,
            "destination": module_destination(module_id),
            "timeout": settings.process_timeout,
        },
    )


def install_packets(
    root: Path,
    flat: FlatWorkspace,
    registry: AdapterRegistry,
    settings: ToolSettings | None = None,
) -> InstallReport:
    """Clone every git-clone packet of a flattened workspace.

    Clones run one after another, in document order. A failed clone is
    recorded and the remaining modules are still attempted.
    """
    settings = settings or ToolSettings()
    report = InstallReport()

    for module_id, module in flat.modules.items():
        packet = module.packet
        if packet is None:
            logger.debug("Module %s has no packet, nothing to install", module_id)
            report.ignored.append(module_id)
            continue
        if not packet.is_git_clone:
            logger.debug("Ignoring module %s: unsupported packet type '%s'", module_id, packet.type)
            report.ignored.append(module_id)
            continue

        target = root / MODULES_DIR / module_id
        if target.is_dir() and any(target.iterdir()):
            logger.info("Module %s already present at %s", module_id, target)
            report.present.append(module_id)
            continue

        (root / MODULES_DIR).mkdir(parents=True, exist_ok=True)
        receipt = registry.execute_action(
            clone_action(module_id, packet.repo, settings),
            workspace_root=str(root),
        )
        report.receipts.append(receipt)
        if receipt.ok:
            report.installed.append(module_id)
        else:
            report.failed.append(module_id)

    logger.info(
        "Install: %d cloned, %d present, %d ignored, %d failed",
        len(report.installed), len(report.present), len(report.ignored), len(report.failed),
    )
    return report
