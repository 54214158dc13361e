"""
Generate use case — run one named generator against the workspace.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from genesis.adapters.registry import AdapterRegistry, default_registry
from genesis.core.config.loader import ConfigError
from genesis.core.config.settings import load_settings
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services.generators import (
    GenerationResult,
    GeneratorContext,
    list_generators,
    resolve,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of running a generator."""

    generator: str = ""
    workspace_root: Path | None = None
    generation: GenerationResult | None = None
    error: str | None = None
    # (name, description) of every generator, filled when the name is unknown
    available: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.generation)

    def to_dict(self) -> dict:
        result: dict = {"generator": self.generator, "ok": self.ok}
        if self.error:
            result["error"] = self.error
        if self.available:
            result["available"] = [
                {"name": name, "description": desc} for name, desc in self.available
            ]
        if self.generation:
            result["files"] = self.generation.files
            result["skipped"] = self.generation.skipped
            result["receipts"] = [r.model_dump() for r in self.generation.receipts]
        return result


def run_generator(
    name: str,
    options: Mapping[str, Any] | None = None,
    root: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> GenerateResult:
    """Resolve *name* and run that generator on a freshly loaded document.

    Args:
        name: Generator name (case-insensitive).
        options: Generator-specific options (``architecture``,
            ``configuration``, ``action``).
        root: Directory to look for genesis.json from (default: cwd).
        registry: Optional pre-configured adapter registry.
    """
    result = GenerateResult(generator=name)

    generator = resolve(name)
    if generator is None:
        result.error = f"Unknown generator '{name}'"
        result.available = list_generators()
        return result
    result.generator = generator.name

    store = WorkspaceStore.discover(root)
    result.workspace_root = store.root

    try:
        doc = store.load_if_exists()
        settings = load_settings(store.root)
        if registry is None:
            registry = default_registry(settings)

        context = GeneratorContext(
            root=store.root,
            workspace=doc,
            settings=settings,
            registry=registry,
        )
        generation = generator.generate(context, options)
    except ConfigError as e:
        result.error = str(e)
        return result
    except OSError as e:
        result.error = f"{generator.name}: cannot write output: {e}"
        return result

    result.generation = generation
    if not generation:
        result.error = generation.error or f"{generator.name} failed"
    return result
