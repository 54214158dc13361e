"""
Git adapter — acquires module sources.

Only ``clone`` is needed: a module's ``git-clone`` packet is cloned into
``.genesis/modules/<moduleId>``. Uses the git CLI, output streamed.
"""

from __future__ import annotations

import logging
import subprocess

from genesis.adapters.base import Adapter, ExecutionContext
from genesis.core.models.action import Receipt

logger = logging.getLogger(__name__)

_OPERATIONS = {"clone"}


class GitAdapter(Adapter):
    """Git version control operations.

    Action params:
        operation (str): 'clone'.
        repo (str): Repository URL.
        destination (str): Target directory, relative to the working dir.
        timeout (int | None): Seconds before the process is killed (default: none).
    """

    def __init__(self, executable: str = "git"):
        self._executable = executable

    @property
    def name(self) -> str:
        return "git"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if operation not in _OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_OPERATIONS))}"

        if not context.params.get("repo"):
            return False, "Missing required param: 'repo' for clone operation"
        if not context.params.get("destination"):
            return False, "Missing required param: 'destination' for clone operation"

        return True, ""

    def execute(self, ctx: ExecutionContext) -> Receipt:
        repo = ctx.params["repo"]
        destination = ctx.params["destination"]
        argv = [self._executable, "clone", repo, destination]
        timeout = ctx.params.get("timeout")

        logger.debug("Cloning %s into %s (cwd=%s)", repo, destination, ctx.working_dir)
        try:
            result = subprocess.run(argv, cwd=ctx.working_dir, timeout=timeout)
        except FileNotFoundError:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Executable not found: {self._executable}",
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"git clone timed out after {timeout}s",
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Git error: {e}",
            )

        return Receipt.from_exit(
            adapter=self.name,
            action_id=ctx.action.id,
            return_code=result.returncode,
            metadata={"repo": repo, "destination": destination},
        )
