"""
Tests for adapter protocol, registry, mock, shell and git adapters.
"""

import sys
from pathlib import Path

from genesis.adapters.base import ExecutionContext
from genesis.adapters.mock import MockAdapter
from genesis.adapters.registry import AdapterRegistry, default_registry
from genesis.adapters.shell.command import ShellCommandAdapter
from genesis.adapters.vcs.git import GitAdapter
from genesis.core.config.settings import ToolSettings
from genesis.core.models.action import Action, Receipt

# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_working_dir_from_params(self):
        ctx = ExecutionContext(
            action=Action(id="test", adapter="shell", params={"cwd": "/elsewhere"}),
            workspace_root="/workspace",
        )
        assert ctx.working_dir == "/elsewhere"

    def test_working_dir_defaults_to_root(self):
        ctx = ExecutionContext(
            action=Action(id="test", adapter="shell"),
            workspace_root="/workspace",
        )
        assert ctx.working_dir == "/workspace"


class TestAction:
    def test_label_falls_back_to_id(self):
        assert Action(id="build", adapter="shell").label == "build"
        assert Action(id="build", adapter="shell", name="make Debug").label == "make Debug"


class TestReceipt:
    def test_from_exit_zero(self):
        receipt = Receipt.from_exit("shell", "x", 0, output="hi")
        assert receipt.ok
        assert receipt.return_code == 0

    def test_from_exit_nonzero(self):
        receipt = Receipt.from_exit("shell", "x", 2)
        assert receipt.failed
        assert receipt.return_code == 2
        assert "code 2" in receipt.error


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(adapter_name="test-mock")
        ctx = ExecutionContext(action=Action(id="op-1", adapter="test-mock"))
        receipt = mock.execute(ctx)
        assert receipt.ok
        assert receipt.return_code == 0
        assert mock.call_count == 1

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure", return_code=3)
        ctx = ExecutionContext(action=Action(id="op-fail", adapter="mock"))
        receipt = mock.execute(ctx)
        assert receipt.failed
        assert receipt.return_code == 3
        assert "Intentional failure" in receipt.error

    def test_failure_is_per_action(self):
        mock = MockAdapter()
        mock.set_failure("op-fail")
        assert mock.execute(ExecutionContext(action=Action(id="op-ok", adapter="mock"))).ok

    def test_calls_record_params(self):
        mock = MockAdapter()
        for i in range(3):
            ctx = ExecutionContext(action=Action(id=f"op-{i}", adapter="mock", params={"i": i}))
            mock.execute(ctx)
        assert mock.call_count == 3
        assert mock.call_log[0].action.id == "op-0"
        assert [c["i"] for c in mock.calls] == [0, 1, 2]


# ── Registry Tests ───────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_register_replaces_same_name(self):
        registry = AdapterRegistry()
        first, second = MockAdapter(adapter_name="shell"), MockAdapter(adapter_name="shell")
        registry.register(first)
        registry.register(second)
        registry.execute_action(Action(id="x", adapter="shell"))
        assert first.call_count == 0
        assert second.call_count == 1

    def test_unknown_adapter_is_a_failed_receipt(self):
        receipt = AdapterRegistry().execute_action(Action(id="x", adapter="nope"))
        assert receipt.failed
        assert "No adapter registered" in receipt.error

    def test_dispatch(self):
        registry = AdapterRegistry()
        mock = MockAdapter(adapter_name="shell")
        registry.register(mock)
        receipt = registry.execute_action(
            Action(id="x", adapter="shell", params={"argv": ["true"]}),
            workspace_root="/ws",
        )
        assert receipt.ok
        assert mock.call_log[0].workspace_root == "/ws"
        assert mock.calls == [{"argv": ["true"]}]

    def test_validation_failure(self, tmp_path: Path):
        registry = AdapterRegistry()
        registry.register(ShellCommandAdapter())
        receipt = registry.execute_action(
            Action(id="x", adapter="shell", params={}), workspace_root=str(tmp_path)
        )
        assert receipt.failed
        assert "argv" in receipt.error

    def test_default_registry(self, tmp_path: Path):
        registry = default_registry(ToolSettings(git="genesis-no-such-git-xyz"))
        shell = registry.execute_action(Action(id="s", adapter="shell"), workspace_root=str(tmp_path))
        assert "argv" in shell.error
        clone = registry.execute_action(
            Action(
                id="clone:m",
                adapter="git",
                params={"operation": "clone", "repo": "r", "destination": "d"},
            ),
            workspace_root=str(tmp_path),
        )
        assert clone.failed
        assert "genesis-no-such-git-xyz" in clone.error


# ── Shell Adapter Tests ──────────────────────────────────────────────


class TestShellCommandAdapter:
    def _run(self, tmp_path: Path, argv: list, **params) -> Receipt:
        registry = AdapterRegistry()
        registry.register(ShellCommandAdapter())
        return registry.execute_action(
            Action(id="cmd", adapter="shell", params={"argv": argv, **params}),
            workspace_root=str(tmp_path),
        )

    def test_success(self, tmp_path: Path):
        receipt = self._run(tmp_path, [sys.executable, "-c", "print('hi')"], stream=False)
        assert receipt.ok
        assert receipt.return_code == 0
        assert receipt.output == "hi"

    def test_exit_status_is_reported(self, tmp_path: Path):
        receipt = self._run(tmp_path, [sys.executable, "-c", "raise SystemExit(4)"], stream=False)
        assert receipt.failed
        assert receipt.return_code == 4

    def test_runs_in_cwd(self, tmp_path: Path):
        receipt = self._run(
            tmp_path,
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            stream=False,
        )
        assert Path(receipt.output).resolve() == tmp_path.resolve()

    def test_missing_executable(self, tmp_path: Path):
        receipt = self._run(tmp_path, ["genesis-no-such-tool-xyz"])
        assert receipt.failed
        assert receipt.return_code is None
        assert "Executable not found" in receipt.error

    def test_missing_cwd(self, tmp_path: Path):
        receipt = self._run(tmp_path, ["true"], cwd=str(tmp_path / "missing"))
        assert receipt.failed
        assert "does not exist" in receipt.error


# ── Git Adapter Tests ────────────────────────────────────────────────


class TestGitAdapter:
    def _ctx(self, **params) -> ExecutionContext:
        return ExecutionContext(action=Action(id="clone:m", adapter="git", params=params))

    def test_validate_requires_repo_and_destination(self):
        adapter = GitAdapter()
        valid, msg = adapter.validate(self._ctx(operation="clone", destination="d"))
        assert not valid
        assert "repo" in msg
        valid, msg = adapter.validate(self._ctx(operation="clone", repo="r"))
        assert not valid
        assert "destination" in msg

    def test_validate_unknown_operation(self):
        valid, msg = GitAdapter().validate(self._ctx(operation="push", repo="r", destination="d"))
        assert not valid
        assert "push" in msg

    def test_missing_git_executable(self, tmp_path: Path):
        adapter = GitAdapter(executable="genesis-no-such-git-xyz")
        receipt = adapter.execute(
            ExecutionContext(
                action=Action(
                    id="clone:m",
                    adapter="git",
                    params={"operation": "clone", "repo": "r", "destination": "d"},
                ),
                workspace_root=str(tmp_path),
            )
        )
        assert receipt.failed
        assert "Executable not found" in receipt.error
