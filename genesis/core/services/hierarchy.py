"""
Hierarchy flattening — one mapping per section, keyed by composite ids.

genesis.json allows ``projects`` and ``modules`` to be either flat::

    "projects": {"Core": {"type": "StaticLib"}}

or grouped one level deep::

    "projects": {"Engine": {"Core": {"type": "StaticLib"}}}

Whether a node is an entry or a group is decided by the presence of the
discriminating field, not by its depth. Grouped entries are flattened
under ``"<group>-<name>"``. Anything nested deeper, or two nodes that
flatten to the same key, is a ``WorkspaceShapeError``.

Nothing here is cached: callers flatten the document they just loaded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from pydantic import BaseModel, ValidationError

from genesis.core.config.loader import ConfigError, WorkspaceShapeError
from genesis.core.models.workspace import (
    MODULE_DISCRIMINATORS,
    PROJECT_DISCRIMINATORS,
    Module,
    Project,
    WorkspaceDocument,
)

logger = logging.getLogger(__name__)


class _Section(NamedTuple):
    key: str                        # field name in genesis.json
    model: type[BaseModel]          # entry type
    discriminators: tuple[str, ...]


PROJECTS = _Section("projects", Project, PROJECT_DISCRIMINATORS)
MODULES = _Section("modules", Module, MODULE_DISCRIMINATORS)


@dataclass
class FlatWorkspace:
    """A workspace with both sections flattened to ``{id: entry}``.

    Mapping order follows the order of the source document.
    """

    name: str
    projects: dict[str, Project] = field(default_factory=dict)
    modules: dict[str, Module] = field(default_factory=dict)

    def runnable_projects(self) -> dict[str, Project]:
        """Projects an editor can launch: console apps that are not hidden."""
        return {
            pid: project
            for pid, project in self.projects.items()
            if project.is_runnable and not project.hide
        }

    def known_ids(self) -> set[str]:
        """Every identifier a dependency may refer to."""
        return set(self.projects) | set(self.modules)


def composite_key(group: str, name: str) -> str:
    """Flattened identifier of a grouped entry."""
    return f"{group}-{name}"


def key_problem(key: str) -> str | None:
    """Why *key* cannot name a file or directory, or ``None``.

    Keys end up in paths (stubs, clone destinations, clean roots).
    """
    if "/" in key or "\\" in key:
        return "must not contain '/' or '\\'"
    if key in (".", ".."):
        return f"must not be '{key}'"
    return None


def is_entry(node: Any, discriminators: tuple[str, ...]) -> bool:
    """Whether *node* is an entry (as opposed to a group of entries)."""
    if isinstance(node, BaseModel):
        return True
    return isinstance(node, Mapping) and any(key in node for key in discriminators)


# ── Flattening ──────────────────────────────────────────────────


def flatten(doc: WorkspaceDocument | Mapping[str, Any]) -> FlatWorkspace:
    """Flatten a workspace document.

    Args:
        doc: A ``WorkspaceDocument`` or the raw mapping decoded from
            genesis.json.

    Returns:
        FlatWorkspace with composite-keyed projects and modules.

    Raises:
        WorkspaceShapeError: An entry is nested more than one level deep,
            a top-level value is neither an entry nor a group, or two
            entries flatten to the same identifier.
        ConfigError: An entry has invalid field values.
    """
    if isinstance(doc, WorkspaceDocument):
        name = doc.name
        projects: Mapping[str, Any] = doc.projects
        modules: Mapping[str, Any] = doc.modules
    else:
        name = str(doc.get("name", ""))
        projects = _section_data(doc, PROJECTS)
        modules = _section_data(doc, MODULES)

    flat = FlatWorkspace(
        name=name,
        projects=_flatten_section(projects, PROJECTS),  # type: ignore[arg-type]
        modules=_flatten_section(modules, MODULES),  # type: ignore[arg-type]
    )
    logger.debug(
        "Flattened workspace '%s': %d projects, %d modules",
        flat.name, len(flat.projects), len(flat.modules),
    )
    return flat


def _flatten_section(data: Mapping[str, Any], section: _Section) -> dict[str, BaseModel]:
    flat: dict[str, BaseModel] = {}
    origins: dict[str, str] = {}

    for flat_key, path, entry in _walk(data, section):
        if flat_key in flat:
            raise WorkspaceShapeError(
                section.key,
                path,
                f"identifier '{flat_key}' is already used by '{origins[flat_key]}'",
            )
        flat[flat_key] = entry
        origins[flat_key] = path

    return flat


def _walk(data: Mapping[str, Any], section: _Section) -> Iterator[tuple[str, str, BaseModel]]:
    """Yield ``(flat_key, path, entry)`` for every entry of a section."""
    for key, node in data.items():
        _check_key(section, key, key)
        if is_entry(node, section.discriminators):
            yield key, key, _entry(node, section, key)
        elif isinstance(node, Mapping):
            for sub_key, sub_node in node.items():
                path = f"{key}/{sub_key}"
                _check_key(section, path, sub_key)
                yield composite_key(key, sub_key), path, _entry(sub_node, section, path)
        else:
            raise WorkspaceShapeError(
                section.key, key, "expected an entry or a group of entries"
            )


def _check_key(section: _Section, path: str, key: str) -> None:
    problem = key_problem(key)
    if problem:
        raise WorkspaceShapeError(section.key, path, f"name {problem}")


def _entry(node: Any, section: _Section, path: str) -> BaseModel:
    """Validate one entry node, rejecting groups nested inside groups."""
    if isinstance(node, section.model):
        return node
    if not is_entry(node, section.discriminators):
        fields = "' or '".join(section.discriminators)
        raise WorkspaceShapeError(
            section.key,
            path,
            f"groups cannot be nested; an entry needs a '{fields}' field",
        )
    try:
        return section.model.model_validate(node)
    except ValidationError as e:
        raise ConfigError(f"Invalid {section.key} entry '{path}': {e}") from e


def _section_data(raw: Mapping[str, Any], section: _Section) -> Mapping[str, Any]:
    data = raw.get(section.key)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise WorkspaceShapeError(
            section.key, section.key, f"expected an object, got {type(data).__name__}"
        )
    return data


# ── Parsing ─────────────────────────────────────────────────────


def parse_workspace(raw: Mapping[str, Any]) -> WorkspaceDocument:
    """Build a ``WorkspaceDocument`` from the raw genesis.json mapping.

    Every node is classified as entry or group before validation, so
    malformed nesting is reported as a ``WorkspaceShapeError`` naming its
    path. Empty groups are preserved. The result is flattened once to
    reject composite-key collisions.
    """
    name = raw.get("name")
    if not isinstance(name, str):
        raise ConfigError("Workspace 'name' must be a string")

    sections: dict[str, dict[str, Any]] = {}
    for section in (PROJECTS, MODULES):
        typed: dict[str, Any] = {}
        for key, node in _section_data(raw, section).items():
            if is_entry(node, section.discriminators):
                typed[key] = _entry(node, section, key)
            elif isinstance(node, Mapping):
                typed[key] = {
                    sub_key: _entry(sub_node, section, f"{key}/{sub_key}")
                    for sub_key, sub_node in node.items()
                }
            else:
                raise WorkspaceShapeError(
                    section.key, key, "expected an entry or a group of entries"
                )
        sections[section.key] = typed

    doc = WorkspaceDocument(name=name, **sections)
    flatten(doc)
    return doc
