"""
Generator contract — shared by every entry in the generator registry.

A generator reads the flattened workspace plus a generator-specific
options mapping and writes artifacts and/or runs an external tool.
Invalid options and a missing genesis.json give a failed
``GenerationResult``; malformed documents (``WorkspaceShapeError``)
propagate to the caller.
"""

from __future__ import annotations

import logging
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from genesis.adapters.registry import AdapterRegistry
from genesis.core.config.settings import ToolSettings
from genesis.core.models.action import Receipt
from genesis.core.models.template import GeneratedFile
from genesis.core.models.workspace import WorkspaceDocument

logger = logging.getLogger(__name__)

NO_WORKSPACE = "Directory does not seem to be a genesis workspace (no genesis.json)."


@dataclass
class GeneratorContext:
    """What a generator works against.

    ``workspace`` is the document the caller just loaded, or ``None``
    when the store had no genesis.json.
    """

    root: Path
    workspace: WorkspaceDocument | None
    settings: ToolSettings = field(default_factory=ToolSettings)
    registry: AdapterRegistry = field(default_factory=AdapterRegistry)


@dataclass
class GenerationResult:
    """Outcome of one ``generate()`` call. Truthy iff it succeeded."""

    generator: str
    ok: bool = False
    error: str | None = None
    files: list[str] = field(default_factory=list)      # written
    skipped: list[str] = field(default_factory=list)    # existed, left alone
    receipts: list[Receipt] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def failure(cls, generator: str, error: str) -> GenerationResult:
        return cls(generator=generator, ok=False, error=error)

    def to_dict(self) -> dict:
        result: dict = {"generator": self.generator, "ok": self.ok}
        if self.error:
            result["error"] = self.error
        result["files"] = self.files
        result["skipped"] = self.skipped
        result["receipts"] = [r.model_dump() for r in self.receipts]
        return result


class Generator(ABC):
    """Base class for registry generators.

    To add a generator:
        1. Subclass Generator
        2. Implement name, description, generate
        3. Add an instance to ``registry._GENERATORS``
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable lowercase dispatch key."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable purpose, shown in generator listings."""

    @abstractmethod
    def generate(
        self,
        context: GeneratorContext,
        options: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Produce this generator's artifacts."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


def write_generated_file(root: Path, file: GeneratedFile) -> bool:
    """Write a GeneratedFile below *root*.

    Returns:
        True if the file was written, False if it already existed and
        ``overwrite`` is off.

    Raises:
        OSError: On any filesystem failure.
    """
    target = root / file.path

    if target.exists() and not file.overwrite:
        logger.debug("Keeping existing %s", file.path)
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(file.content, encoding="utf-8")
    logger.info("Wrote generated file: %s", target)
    return True


def replace_generated_files(root: Path, files: list[GeneratedFile]) -> list[str]:
    """Write *files* as a set, replacing whatever is there.

    Every file is staged to a temp file next to its target first. Targets
    are only replaced once all of them are staged, so a failed write
    leaves the previous set in place.

    Raises:
        OSError: On any filesystem failure while staging or replacing.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for file in files:
            target = root / file.path
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
            staged.append((Path(tmp_path), target))
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(file.content)

        for tmp, target in staged:
            tmp.replace(target)
            logger.info("Wrote generated file: %s", target)
    finally:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)

    return [file.path for file in files]
