"""
Adapter base — the protocol between genesis and the tools it drives.

git, premake5, msbuild and make are each started by an adapter. An
adapter checks an Action's params before anything runs and reports the
outcome as a Receipt. It does not raise: a missing executable or a
non-zero exit is a failed receipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from genesis.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """An action bound to the workspace it runs in."""

    action: Action
    workspace_root: str = "."

    @property
    def params(self) -> dict[str, Any]:
        return self.action.params

    @property
    def working_dir(self) -> str:
        """``params['cwd']`` if given, else the workspace root."""
        return self.params.get("cwd") or self.workspace_root


class Adapter(ABC):
    """One external tool."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Key that Actions use in their ``adapter`` field."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """``(True, "")`` when the params are complete, else ``(False, reason)``."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the tool to completion."""
