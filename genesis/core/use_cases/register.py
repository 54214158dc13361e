"""
Register use cases — create a workspace, add projects and modules.

Each call loads genesis.json, applies one registration and saves the
whole document back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from genesis.core.config.loader import ConfigError
from genesis.core.models.workspace import PREMAKE_LIBRARY, WorkspaceDocument
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.core.services import registration
from genesis.core.services.hierarchy import composite_key

logger = logging.getLogger(__name__)


@dataclass
class RegisterResult:
    """Result of a registration."""

    entry: str = ""                 # workspace name, project id or module id
    config_path: Path | None = None
    document: WorkspaceDocument | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok, "entry": self.entry}
        if self.error:
            result["error"] = self.error
        if self.config_path:
            result["config_path"] = str(self.config_path)
        return result


def init_workspace(
    name: str,
    root: Path | None = None,
    force: bool = False,
) -> RegisterResult:
    """Create an empty genesis.json in *root* (default: cwd).

    An existing genesis.json is only replaced when *force* is set.
    """
    store = WorkspaceStore((root or Path.cwd()).resolve())
    result = RegisterResult(entry=name, config_path=store.path)

    if store.exists() and not force:
        result.error = f"{store.path} already exists"
        return result

    try:
        doc = registration.new_workspace(name)
        store.save(doc)
    except ConfigError as e:
        result.error = str(e)
        return result
    except OSError as e:
        result.error = f"Cannot write {store.path}: {e}"
        return result

    result.entry = doc.name
    result.document = doc
    return result


def register_project(
    name: str,
    group: str,
    type: str,
    own_includes: bool = True,
    root: Path | None = None,
) -> RegisterResult:
    """Add a project to the workspace at (or above) *root*."""
    store = WorkspaceStore.discover(root)
    result = RegisterResult(
        entry=composite_key(group.strip(), name.strip()),
        config_path=store.path,
    )

    try:
        doc = registration.add_project(
            store.load(),
            name=name,
            group=group,
            type=type,
            own_includes=own_includes,
        )
        store.save(doc)
    except ConfigError as e:
        result.error = str(e)
        return result
    except OSError as e:
        result.error = f"Cannot write {store.path}: {e}"
        return result

    result.document = doc
    return result


def register_module(
    name: str,
    repo: str,
    include: str = registration.DEFAULT_MODULE_INCLUDE,
    script: str | None = None,
    library_type: str = PREMAKE_LIBRARY,
    root: Path | None = None,
) -> RegisterResult:
    """Add a git-clone module with a premake library to the workspace."""
    store = WorkspaceStore.discover(root)
    result = RegisterResult(entry=name.strip(), config_path=store.path)

    try:
        doc = registration.add_module(
            store.load(),
            name=name,
            type=library_type,
            include=include,
            packet=registration.git_clone_packet(repo),
            library=registration.premake_library(name.strip(), script),
        )
        store.save(doc)
    except ConfigError as e:
        result.error = str(e)
        return result
    except OSError as e:
        result.error = f"Cannot write {store.path}: {e}"
        return result

    result.document = doc
    return result


def register_dependency(
    project_id: str,
    dependency: str,
    root: Path | None = None,
) -> RegisterResult:
    """Make a project depend on another project or module."""
    store = WorkspaceStore.discover(root)
    result = RegisterResult(entry=project_id, config_path=store.path)

    try:
        doc = registration.add_dependency(store.load(), project_id, dependency)
        store.save(doc)
    except ConfigError as e:
        result.error = str(e)
        return result
    except OSError as e:
        result.error = f"Cannot write {store.path}: {e}"
        return result

    result.document = doc
    return result
