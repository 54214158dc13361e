"""
Domain models — Pydantic types for genesis.

All models are re-exported here for convenient access:

    from genesis.core.models import WorkspaceDocument, Project, Module, Receipt
"""

from genesis.core.models.action import Action, Receipt
from genesis.core.models.template import GeneratedFile
from genesis.core.models.workspace import (
    GIT_CLONE_PACKET,
    PREMAKE_LIBRARY,
    Library,
    Module,
    Packet,
    Project,
    ProjectType,
    WorkspaceDocument,
)

__all__ = [
    "GIT_CLONE_PACKET",
    "PREMAKE_LIBRARY",
    # action.py
    "Action",
    # template.py
    "GeneratedFile",
    # workspace.py
    "Library",
    "Module",
    "Packet",
    "Project",
    "ProjectType",
    "Receipt",
    "WorkspaceDocument",
]
