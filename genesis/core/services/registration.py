"""
Registration — adding projects and modules to a workspace document.

Every function takes the current document and returns a new one; the
input is never mutated. Saving is the caller's job.
"""

from __future__ import annotations

import logging

from genesis.core.config.loader import ConfigError
from genesis.core.models.workspace import (
    GIT_CLONE_PACKET,
    MODULE_DISCRIMINATORS,
    PREMAKE_LIBRARY,
    PROJECT_DISCRIMINATORS,
    Library,
    Module,
    Packet,
    Project,
    WorkspaceDocument,
)
from genesis.core.services.hierarchy import composite_key, flatten, key_problem

logger = logging.getLogger(__name__)

DEFAULT_MODULE_INCLUDE = "include/"


class RegistrationError(ConfigError):
    """Raised when an entry cannot be added (duplicate or invalid input)."""


def new_workspace(name: str) -> WorkspaceDocument:
    """An empty workspace."""
    name = name.strip()
    if not name:
        raise RegistrationError("Workspace name must not be empty")
    return WorkspaceDocument(name=name, projects={}, modules={})


def own_include_dir(group: str, name: str) -> str:
    """Include directory of a project's own sources."""
    return f"%{{wks.location}}/{group}/src/{name}/"


def default_library_script(name: str) -> str:
    """Where a module's premake integration script lives by default."""
    return f"%{{wks.location}}/.genesis/{name}.lua"


def split_include_dirs(raw: str) -> list[str]:
    """Split a comma-separated include list, dropping blank entries."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _check_identifier(kind: str, value: str, reserved: tuple[str, ...] = ()) -> str:
    value = value.strip()
    if not value:
        raise RegistrationError(f"{kind} must not be empty")
    problem = key_problem(value)
    if problem:
        raise RegistrationError(f"{kind} '{value}' {problem}")
    # a grouped entry named after a discriminator turns its group into an entry
    if value in reserved:
        raise RegistrationError(f"{kind} '{value}' is a reserved field name")
    return value


def add_project(
    doc: WorkspaceDocument,
    *,
    name: str,
    group: str,
    type: str,
    own_includes: bool = True,
) -> WorkspaceDocument:
    """Register a project inside a group.

    Raises:
        RegistrationError: The project already exists, the group name is
            taken by an ungrouped project, or the composite id collides
            with an existing one.
    """
    name = _check_identifier("Project name", name, PROJECT_DISCRIMINATORS)
    group = _check_identifier("Group name", group)

    existing = doc.projects.get(group)
    if isinstance(existing, Project):
        raise RegistrationError(f"'{group}' is an ungrouped project and cannot be used as a group")
    if existing is not None and name in existing:
        raise RegistrationError(f"{name} in {group} already exists!")

    pid = composite_key(group, name)
    if pid in flatten(doc).projects:
        raise RegistrationError(f"A project with id '{pid}' already exists!")

    project = Project(
        type=type,
        include_dirs=[own_include_dir(group, name)] if own_includes else [],
        dependencies=[],
    )

    updated = doc.model_copy(deep=True)
    group_entries = updated.projects.get(group)
    if group_entries is None:
        group_entries = updated.projects[group] = {}
    group_entries[name] = project  # type: ignore[index]

    logger.info("Registered project %s (%s)", pid, type)
    return updated


def git_clone_packet(repo: str) -> Packet:
    repo = repo.strip()
    if not repo:
        raise RegistrationError("Repository url must not be empty")
    return Packet(type=GIT_CLONE_PACKET, repo=repo)


def premake_library(name: str, script: str | None = None) -> Library:
    return Library(type=PREMAKE_LIBRARY, script=script or default_library_script(name))


def add_module(
    doc: WorkspaceDocument,
    *,
    name: str,
    type: str = PREMAKE_LIBRARY,
    include: str = DEFAULT_MODULE_INCLUDE,
    packet: Packet | None = None,
    library: Library | None = None,
) -> WorkspaceDocument:
    """Register an ungrouped module.

    Args:
        include: Comma-separated include directories.

    Raises:
        RegistrationError: A module (or module group) with that name exists.
    """
    name = _check_identifier("Module name", name, MODULE_DISCRIMINATORS)

    if name in doc.modules or name in flatten(doc).modules:
        raise RegistrationError(f"Module {name} already exists!")

    module = Module(
        type=type,
        include_dirs=split_include_dirs(include),
        dependencies=[],
        packet=packet,
        library=library,
    )

    updated = doc.model_copy(deep=True)
    updated.modules[name] = module

    logger.info("Registered module %s (%s)", name, type)
    return updated


def add_dependency(doc: WorkspaceDocument, project_id: str, dependency: str) -> WorkspaceDocument:
    """Make a project depend on another project or module.

    Both sides are flattened ids. The dependency list stays free of
    duplicates.

    Raises:
        RegistrationError: Either id is unknown.
    """
    flat = flatten(doc)
    if project_id not in flat.projects:
        raise RegistrationError(f"Unknown project '{project_id}'")
    if dependency not in flat.known_ids():
        raise RegistrationError(f"Unknown project or module '{dependency}'")
    if dependency == project_id:
        raise RegistrationError(f"Project '{project_id}' cannot depend on itself")

    updated = doc.model_copy(deep=True)
    target = flatten(updated).projects[project_id]
    if dependency not in target.dependencies:
        target.dependencies.append(dependency)
    return updated
