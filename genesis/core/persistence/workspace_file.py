"""
Workspace store — atomic read/write of genesis.json.

The document is read wholesale and written wholesale. Writes are atomic
(write to temp file, then rename) so an interrupted save never leaves a
half-written genesis.json behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from genesis.core.config.loader import (
    WORKSPACE_FILE,
    find_workspace_file,
    read_workspace_data,
    workspace_root,
)
from genesis.core.models.workspace import WorkspaceDocument
from genesis.core.services.hierarchy import parse_workspace

logger = logging.getLogger(__name__)

_INDENT = 4


def dump_workspace(doc: WorkspaceDocument) -> str:
    """Serialise a document the way it is stored on disk."""
    return json.dumps(doc.to_json_data(), indent=_INDENT, ensure_ascii=False) + "\n"


class WorkspaceStore:
    """genesis.json at a workspace root.

    Every ``load()`` reads the file again and returns a new document;
    nothing is cached between calls.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def discover(cls, start_dir: Path | None = None) -> WorkspaceStore:
        """Store for the nearest genesis.json above *start_dir*.

        Falls back to *start_dir* (or cwd) when none exists yet, which is
        where ``genesis init`` creates one.
        """
        found = find_workspace_file(start_dir)
        if found is not None:
            return cls(workspace_root(found))
        return cls((start_dir or Path.cwd()).resolve())

    @property
    def path(self) -> Path:
        return self.root / WORKSPACE_FILE

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> WorkspaceDocument:
        """Load and validate genesis.json.

        Raises:
            WorkspaceNotFoundError: If there is no genesis.json.
            WorkspaceShapeError: If projects/modules are malformed.
            ConfigError: If the file is unreadable or invalid.
        """
        doc = parse_workspace(read_workspace_data(self.path))
        logger.info(
            "Loaded workspace '%s' (%d project nodes, %d module nodes)",
            doc.name, len(doc.projects), len(doc.modules),
        )
        return doc

    def load_if_exists(self) -> WorkspaceDocument | None:
        """Like ``load()``, but ``None`` when there is no genesis.json."""
        if not self.exists():
            return None
        return self.load()

    def save(self, doc: WorkspaceDocument) -> Path:
        """Write the document (atomic write).

        Returns:
            Path of the written genesis.json.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        content = dump_workspace(doc)

        _fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=".genesis_", suffix=".tmp")
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(self.path)
        except Exception:
            tmp.unlink(missing_ok=True)
            logger.error("Failed to save workspace to %s", self.path)
            raise

        logger.debug("Workspace saved to %s", self.path)
        return self.path
