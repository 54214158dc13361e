"""
Adapter registry — central dispatch for external process execution.

Services never start processes themselves: they build Actions and run
them through the registry, which resolves the adapter, validates,
executes and times the call.
"""

from __future__ import annotations

import logging
import time

from genesis.adapters.base import Adapter, ExecutionContext
from genesis.core.config.settings import ToolSettings
from genesis.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters keyed by name; ``execute_action`` never raises."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter: %s", adapter.name)
        self._adapters[adapter.name] = adapter

    def execute_action(self, action: Action, workspace_root: str = ".") -> Receipt:
        """Validate *action*, then run it through the adapter it names.

        Unknown adapters, rejected params and adapters that raise all
        come back as failed receipts.
        """
        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return _rejected(action, f"No adapter registered for '{action.adapter}'")

        context = ExecutionContext(action=action, workspace_root=workspace_root)
        try:
            is_valid, reason = adapter.validate(context)
        except Exception as e:
            return _rejected(action, f"Validation error: {e}")
        if not is_valid:
            return _rejected(action, f"Validation failed: {reason}")

        logger.info("Running %s (%s)", action.label, action.adapter)
        started = time.monotonic()
        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised while running %s: %s", action.adapter, action.id, e)
            receipt = _rejected(action, f"Unexpected error: {e}")

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        if receipt.failed:
            logger.warning("%s failed: %s", action.label, receipt.error)
        return receipt


def _rejected(action: Action, error: str) -> Receipt:
    return Receipt.failure(adapter=action.adapter, action_id=action.id, error=error)


def default_registry(settings: ToolSettings | None = None) -> AdapterRegistry:
    """Registry with the real shell and git adapters."""
    from genesis.adapters.shell.command import ShellCommandAdapter
    from genesis.adapters.vcs.git import GitAdapter

    settings = settings or ToolSettings()
    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter())
    registry.register(GitAdapter(executable=settings.git))
    return registry
