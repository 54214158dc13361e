"""
Action and Receipt models — the process execution contract.

An Action asks an adapter to run an external tool (git, premake, a
build toolchain). A Receipt reports what happened, including the exit
status of the process. Adapters return receipts; they never raise.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """A request to run one external operation through an adapter."""

    id: str                         # e.g. "clone:glfw", "premake", "build"
    adapter: str                    # which adapter handles this
    name: str = ""                  # label for log lines
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.name or self.id


class Receipt(BaseModel):
    """Outcome of an adapter execution.

    ``return_code`` is the exit status of the external process when one
    was started; ``None`` means the process never ran (validation
    failure, missing executable, unknown adapter).
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"
    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None

    # command line, cwd, repo... echoed into --json output
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def from_exit(
        cls,
        adapter: str,
        action_id: str,
        return_code: int,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Receipt for a finished process: ok only on exit status 0."""
        if return_code == 0:
            return cls.success(adapter, action_id, output=output, return_code=return_code, **kwargs)
        return cls.failure(
            adapter,
            action_id,
            error=f"Process exited with code {return_code}",
            output=output,
            return_code=return_code,
            **kwargs,
        )
