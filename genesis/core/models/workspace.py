"""
Workspace model — the contents of genesis.json.

``projects`` and ``modules`` each come in two permitted shapes: a flat
mapping of entries, or one level of grouping (group -> name -> entry).
A node is an entry when it carries the discriminating field; otherwise
it is a group. Use ``genesis.core.services.hierarchy.flatten`` to get a
single mapping keyed by composite identifiers.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Keys whose presence marks a node as an entry rather than a group
PROJECT_DISCRIMINATORS = ("type",)
MODULE_DISCRIMINATORS = ("type", "packet")

GIT_CLONE_PACKET = "git-clone"
PREMAKE_LIBRARY = "premake"


class ProjectType(str, Enum):
    """Project kinds offered by the registration prompt."""

    STATIC_LIB = "StaticLib"
    CONSOLE_APP = "ConsoleApp"


class Project(BaseModel):
    """A buildable unit: a static library or a console executable.

    ``type`` is stored as a free-form string; only ``ConsoleApp``
    projects are treated as runnable targets.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    alias: str | None = None
    include_dirs: list[str] = Field(default_factory=list, alias="includeDirs")
    dependencies: list[str] = Field(default_factory=list)
    hide: bool = False

    @property
    def is_runnable(self) -> bool:
        """Whether editors should offer this project as a launch target."""
        return self.type == ProjectType.CONSOLE_APP.value


class Packet(BaseModel):
    """How a module's sources are acquired.

    Only ``git-clone`` is understood today. Unknown kinds keep all their
    fields so that newer documents survive a load/save cycle.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    repo: str = ""

    @property
    def is_git_clone(self) -> bool:
        return self.type == GIT_CLONE_PACKET


class Library(BaseModel):
    """How a module is wired into the build (a premake script)."""

    type: str = PREMAKE_LIBRARY
    script: str = ""


class Module(BaseModel):
    """An external dependency: acquired via a packet, built via a library."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = PREMAKE_LIBRARY
    include_dirs: list[str] = Field(default_factory=list, alias="includeDirs")
    dependencies: list[str] = Field(default_factory=list)
    script: str | None = None
    packet: Packet | None = None
    library: Library | None = None


class WorkspaceDocument(BaseModel):
    """Root of genesis.json.

    Values of ``projects``/``modules`` are either an entry or a group
    mapping sub-identifiers to entries. Build documents from raw JSON with
    ``hierarchy.parse_workspace`` so malformed nesting is reported with
    its path.
    """

    name: str
    projects: dict[str, Project | dict[str, Project]] = Field(default_factory=dict)
    modules: dict[str, Module | dict[str, Module]] = Field(default_factory=dict)

    def to_json_data(self) -> dict:
        """Serialisable form with the on-disk field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
