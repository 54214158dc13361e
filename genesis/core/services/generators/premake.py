"""
premake generator — override-script stubs, then premake itself.

Keeps one user-editable Lua stub for the workspace and one per project
under ``.genesis/``. Stubs are created once and never overwritten, so
edits survive regeneration. Afterwards premake runs in the workspace
root to emit the IDE/toolchain project files.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any

from genesis.core.config.loader import GENESIS_DIR
from genesis.core.models.action import Action
from genesis.core.models.template import GeneratedFile
from genesis.core.services.generators.base import (
    NO_WORKSPACE,
    GenerationResult,
    Generator,
    GeneratorContext,
    write_generated_file,
)
from genesis.core.services.hierarchy import flatten

logger = logging.getLogger(__name__)

WORKSPACE_STUB = f"{GENESIS_DIR}/workspace.lua"
PROJECT_STUB_DIR = f"{GENESIS_DIR}/projects"

_WORKSPACE_TEMPLATE = """\
-- ── genesis: workspace overrides ────────────────────────────────
-- Workspace: {name}
--
-- Runs inside the generated workspace definition. Add filters,
-- defines or platform settings that apply to every project here.
-- genesis creates this file once and never overwrites it.

print("genesis: applying workspace overrides for {name}")
"""

_PROJECT_TEMPLATE = """\
-- ── genesis: project overrides ──────────────────────────────────
-- Project: {pid}
--
-- Runs inside the generated project block for {pid}. Add files,
-- links or build options specific to this project here.
-- genesis creates this file once and never overwrites it.

print("genesis: applying project overrides for {pid}")
"""


def project_stub_path(pid: str) -> str:
    """Stub location for a flattened project id."""
    return str(PurePosixPath(PROJECT_STUB_DIR) / f"{pid}.lua")


class BuildStubGenerator(Generator):
    """Ensures override stubs exist, then runs premake.

    Options:
        action (str): premake action, e.g. ``vs2022`` or ``gmake2``
            (default: the ``premake_action`` tool setting).
    """

    @property
    def name(self) -> str:
        return "premake"

    @property
    def description(self) -> str:
        return "Override-script stubs in .genesis/ plus premake project files"

    def generate(
        self,
        context: GeneratorContext,
        options: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        options = options or {}

        if context.workspace is None:
            return GenerationResult.failure(self.name, NO_WORKSPACE)

        flat = flatten(context.workspace)
        result = GenerationResult(generator=self.name)

        (context.root / GENESIS_DIR).mkdir(parents=True, exist_ok=True)

        stubs = [
            GeneratedFile(
                path=WORKSPACE_STUB,
                content=_WORKSPACE_TEMPLATE.format(name=flat.name),
            )
        ]
        stubs.extend(
            GeneratedFile(
                path=project_stub_path(pid),
                content=_PROJECT_TEMPLATE.format(pid=pid),
            )
            for pid in flat.projects
        )

        for stub in stubs:
            if write_generated_file(context.root, stub):
                result.files.append(stub.path)
            else:
                result.skipped.append(stub.path)

        action = options.get("action") or context.settings.premake_action
        receipt = context.registry.execute_action(
            Action(
                id="premake",
                adapter="shell",
                name=f"premake {action}",
                params={
                    "argv": [context.settings.premake, action],
                    "cwd": str(context.root),
                    "timeout": context.settings.process_timeout,
                },
            ),
            workspace_root=str(context.root),
        )
        result.receipts.append(receipt)

        result.ok = receipt.ok
        if not receipt.ok:
            result.error = f"premake {action} failed: {receipt.error}"

        logger.info(
            "premake: %d stubs created, %d kept, exit=%s",
            len(result.files), len(result.skipped), receipt.return_code,
        )
        return result
