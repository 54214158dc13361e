"""
VS Code generator — debug launch configurations and build tasks.

Every runnable project (``ConsoleApp``, not hidden) gets a launch entry
that debugs its executable from the premake output tree and builds it
first through a ``build-<configuration>`` task. Build tasks depend on a
fixed ``genesis-regenerate`` task that re-runs the premake generator.

Output goes to ``.vscode/tasks.json`` and ``.vscode/launch.json`` and is
rewritten on every run.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from genesis.core.config.settings import ToolSettings
from genesis.core.models.template import GeneratedFile
from genesis.core.services.generators.base import (
    NO_WORKSPACE,
    GenerationResult,
    Generator,
    GeneratorContext,
    replace_generated_files,
)
from genesis.core.services.hierarchy import FlatWorkspace, flatten
from genesis.core.services.toolchains import (
    Architecture,
    msbuild_command,
    resolve_architecture,
    supported_architectures,
)

logger = logging.getLogger(__name__)

TASKS_FILE = ".vscode/tasks.json"
LAUNCH_FILE = ".vscode/launch.json"

TASKS_VERSION = "2.0.0"
LAUNCH_VERSION = "0.2.0"

REGENERATE_TASK = "genesis-regenerate"


def build_task_label(configuration: str) -> str:
    return f"build-{configuration}"


def _dump(data: dict) -> str:
    return json.dumps(data, indent=4) + "\n"


class VSCodeLaunchGenerator(Generator):
    """Writes VS Code launch and task descriptors for runnable projects.

    Options:
        architecture (str): Key of the architecture table (``x86``, ``x64``).
        configuration (str): Build configuration name, e.g. ``Debug``.
    """

    @property
    def name(self) -> str:
        return "vscode"

    @property
    def description(self) -> str:
        return "VS Code launch.json and tasks.json for runnable projects"

    def generate(
        self,
        context: GeneratorContext,
        options: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        options = options or {}

        if context.workspace is None:
            return GenerationResult.failure(self.name, NO_WORKSPACE)

        arch_name = options.get("architecture")
        arch = resolve_architecture(arch_name)
        if arch is None:
            return GenerationResult.failure(
                self.name,
                f"Unknown architecture '{arch_name}'. "
                f"Valid: {', '.join(supported_architectures())}",
            )

        configuration = options.get("configuration")
        if not isinstance(configuration, str) or not configuration.strip():
            return GenerationResult.failure(
                self.name, "A build configuration is required (e.g. Debug)."
            )

        flat = flatten(context.workspace)
        tasks, launches = self.descriptors(flat, arch, configuration, context.settings)

        outputs = [
            GeneratedFile(
                path=TASKS_FILE,
                content=_dump({"version": TASKS_VERSION, "tasks": tasks}),
                overwrite=True,
            ),
            GeneratedFile(
                path=LAUNCH_FILE,
                content=_dump({"version": LAUNCH_VERSION, "configurations": launches}),
                overwrite=True,
            ),
        ]

        result = GenerationResult(generator=self.name, ok=True)
        result.files = replace_generated_files(context.root, outputs)

        logger.info(
            "vscode: %d launch entries, %d tasks (%s, %s)",
            len(launches), len(tasks), arch.msb, configuration,
        )
        return result

    def descriptors(
        self,
        flat: FlatWorkspace,
        arch: Architecture,
        configuration: str,
        settings: ToolSettings,
    ) -> tuple[list[dict], list[dict]]:
        """Build ``(tasks, launch_configurations)`` for a flattened workspace."""
        build_tasks: dict[str, dict] = {}
        launches: list[dict] = []

        for pid in flat.runnable_projects():
            label = build_task_label(configuration)
            if label not in build_tasks:
                build_tasks[label] = self._build_task(flat.name, arch, configuration, settings)
            launches.append(self._launch(pid, arch, configuration, settings))

        if not build_tasks:
            return [], launches

        return [self._regenerate_task(), *build_tasks.values()], launches

    # ── Descriptors ─────────────────────────────────────────────

    def _launch(
        self,
        pid: str,
        arch: Architecture,
        configuration: str,
        settings: ToolSettings,
    ) -> dict:
        folder = (
            f"${{workspaceFolder}}/{settings.output_root}/{arch.premake}/{configuration}/{pid}"
        )
        return {
            "name": f"{pid}-{configuration}",
            "type": "cppvsdbg",
            "request": "launch",
            "program": f"{folder}/{pid}.{settings.executable_extension}",
            "args": [],
            "cwd": folder,
            "console": "integratedTerminal",
            "preLaunchTask": build_task_label(configuration),
        }

    def _build_task(
        self,
        workspace: str,
        arch: Architecture,
        configuration: str,
        settings: ToolSettings,
    ) -> dict:
        argv = msbuild_command(settings, workspace, arch, configuration)
        return {
            "label": build_task_label(configuration),
            "type": "shell",
            "command": argv[0],
            "args": argv[1:],
            "group": "build",
            "dependsOn": [REGENERATE_TASK],
            "problemMatcher": "$msCompile",
        }

    def _regenerate_task(self) -> dict:
        return {
            "label": REGENERATE_TASK,
            "type": "shell",
            "command": "genesis",
            "args": ["generate", "premake"],
            "problemMatcher": [],
        }
