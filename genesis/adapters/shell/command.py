"""
Shell command adapter — run an external tool and report its exit status.

Used for premake and the build toolchains. By default the child's
stdout/stderr are inherited so the user sees the tool's own output live;
genesis only looks at the exit status.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from genesis.adapters.base import Adapter, ExecutionContext
from genesis.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Run a command given as an argument vector.

    Action params:
        argv (list[str]): Executable and arguments.
        cwd (str): Working directory (default: workspace root).
        stream (bool): Inherit stdout/stderr instead of capturing (default: True).
        timeout (int | None): Seconds before the process is killed (default: none).
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = context.params.get("argv")
        if not argv or not isinstance(argv, list):
            return False, "Missing required param: 'argv'"

        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        argv = [str(a) for a in context.params["argv"]]
        stream = context.params.get("stream", True)
        timeout = context.params.get("timeout")
        cwd = context.working_dir
        command = " ".join(argv)

        logger.debug("Executing: %s (cwd=%s)", command, cwd)
        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=not stream,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Executable not found: {argv[0]}",
                metadata={"command": command},
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": command, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": command},
            )

        metadata: dict = {"command": command, "cwd": cwd}
        if not stream and result.stderr:
            metadata["stderr"] = result.stderr.strip()

        return Receipt.from_exit(
            adapter=self.name,
            action_id=context.action.id,
            return_code=result.returncode,
            output=(result.stdout or "").strip(),
            metadata=metadata,
        )
