"""
Mock adapter — stands in for the shell or git adapter in tests.

Register it under the name of the adapter it replaces. Every action
succeeds with exit status 0 unless ``set_failure`` says otherwise.
"""

from __future__ import annotations

from typing import Any

from genesis.adapters.base import Adapter, ExecutionContext
from genesis.core.models.action import Receipt


class MockAdapter(Adapter):
    def __init__(self, adapter_name: str = "mock"):
        self._name = adapter_name
        self._failures: dict[str, Receipt] = {}
        self.call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.call_log)

    @property
    def calls(self) -> list[dict[str, Any]]:
        """Params of every executed action, in call order."""
        return [ctx.params for ctx in self.call_log]

    def set_failure(self, action_id: str, error: str = "Mock failure", return_code: int = 1) -> None:
        """Fail *action_id* as if its process had exited with *return_code*."""
        self._failures[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.call_log.append(context)
        failure = self._failures.get(context.action.id)
        if failure is not None:
            return failure.model_copy()
        return Receipt.success(adapter=self._name, action_id=context.action.id, return_code=0)
