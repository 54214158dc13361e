"""
Configuration loader — locates and reads genesis.json.

This module owns the configuration error hierarchy. Turning the raw
mapping into a ``WorkspaceDocument`` is done by
``genesis.core.services.hierarchy.parse_workspace``; the
``WorkspaceStore`` combines both.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Default workspace filename
WORKSPACE_FILE = "genesis.json"

# Workspace-scoped directory for stubs, settings and installed modules
GENESIS_DIR = ".genesis"


class ConfigError(Exception):
    """Raised when workspace configuration is invalid or missing."""


class WorkspaceNotFoundError(ConfigError):
    """Raised when an operation needs genesis.json and there is none."""


class WorkspaceShapeError(ConfigError):
    """Raised when projects/modules are nested in an unsupported way.

    ``path`` names the offending node as ``<group>/<name>`` (or just
    ``<key>`` for a top-level node).
    """

    def __init__(self, section: str, path: str, reason: str) -> None:
        self.section = section
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed {section} entry '{path}': {reason}")


def find_workspace_file(start_dir: Path | None = None) -> Path | None:
    """Search for genesis.json starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to genesis.json, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / WORKSPACE_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def read_workspace_data(path: Path) -> dict[str, Any]:
    """Read genesis.json and return the decoded JSON mapping.

    Raises:
        WorkspaceNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    if not path.is_file():
        raise WorkspaceNotFoundError(
            f"No {WORKSPACE_FILE} found at {path.parent}. "
            "Run 'genesis init' to create one."
        )

    logger.debug("Loading workspace from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    return data


def workspace_root(workspace_path: Path) -> Path:
    """Get the workspace root directory from a genesis.json path."""
    return workspace_path.parent.resolve()
