"""
Build use case — compile the workspace with a build toolchain.

Expects the toolchain's project files to exist already (``genesis
generate premake``). Only the exit status of the toolchain is reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from genesis.adapters.registry import AdapterRegistry, default_registry
from genesis.core.config.loader import ConfigError
from genesis.core.config.settings import load_settings
from genesis.core.models.action import Action, Receipt
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.toolchains import (
    list_toolchains,
    resolve_architecture,
    resolve_toolchain,
    supported_architectures,
)

logger = logging.getLogger(__name__)

DEFAULT_TOOLCHAIN = "msbuild"
DEFAULT_ARCHITECTURE = "x64"
DEFAULT_CONFIGURATION = "Debug"


@dataclass
class BuildResult:
    toolchain: str = DEFAULT_TOOLCHAIN
    architecture: str = DEFAULT_ARCHITECTURE
    configuration: str = DEFAULT_CONFIGURATION
    workspace_root: Path | None = None
    command: list[str] = field(default_factory=list)
    receipt: Receipt | None = None
    error: str | None = None
    choices: list[str] = field(default_factory=list)    # valid values after a bad option

    @property
    def ok(self) -> bool:
        return self.error is None and self.receipt is not None and self.receipt.ok

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "toolchain": self.toolchain,
            "architecture": self.architecture,
            "configuration": self.configuration,
        }
        if self.error:
            result["error"] = self.error
        if self.choices:
            result["choices"] = self.choices
        if self.command:
            result["command"] = self.command
        if self.receipt:
            result["receipt"] = self.receipt.model_dump()
        return result


def build_workspace(
    toolchain: str = DEFAULT_TOOLCHAIN,
    architecture: str = DEFAULT_ARCHITECTURE,
    configuration: str = DEFAULT_CONFIGURATION,
    root: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> BuildResult:
    """Run the toolchain for one (architecture, configuration) pair.

    Args:
        toolchain: ``msbuild`` or ``make``.
        architecture: Key of the architecture table (``x86``, ``x64``).
        configuration: Build configuration, e.g. ``Debug`` or ``Release``.
        root: Directory to look for genesis.json from (default: cwd).
        registry: Optional pre-configured adapter registry.
    """
    result = BuildResult(
        toolchain=toolchain,
        architecture=architecture,
        configuration=configuration,
    )

    chain = resolve_toolchain(toolchain)
    if chain is None:
        result.error = f"Unknown toolchain '{toolchain}'"
        result.choices = [name for name, _ in list_toolchains()]
        return result

    arch = resolve_architecture(architecture)
    if arch is None:
        result.error = f"Unknown architecture '{architecture}'"
        result.choices = supported_architectures()
        return result

    if not configuration or not configuration.strip():
        result.error = "A build configuration is required (e.g. Debug)."
        return result

    store = WorkspaceStore.discover(root)
    result.workspace_root = store.root

    try:
        doc = store.load()
        settings = load_settings(store.root)
    except ConfigError as e:
        result.error = str(e)
        return result

    if registry is None:
        registry = default_registry(settings)

    result.command = chain.command(settings, doc.name, arch, configuration)
    result.receipt = registry.execute_action(
        Action(
            id="build",
            adapter="shell",
            name=f"{chain.name} {configuration}|{arch.msb}",
            params={
                "argv": result.command,
                "cwd": str(store.root),
                "timeout": settings.process_timeout,
            },
        ),
        workspace_root=str(store.root),
    )

    if not result.receipt.ok:
        result.error = f"{chain.name} failed: {result.receipt.error}"
    return result
