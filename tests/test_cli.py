"""
Tests for CLI commands — global options, workspace editing and operations.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from genesis.adapters.mock import MockAdapter
from genesis.adapters.registry import AdapterRegistry
from genesis.core.persistence.workspace_file import WorkspaceStore
from genesis.main import cli


@pytest.fixture
def mocked_tools(monkeypatch):
    """Replace the real shell/git adapters used by every command."""
    shell = MockAdapter(adapter_name="shell")
    git = MockAdapter(adapter_name="git")

    def _registry(settings=None):
        registry = AdapterRegistry()
        registry.register(shell)
        registry.register(git)
        return registry

    for module in ("install", "generate", "build"):
        monkeypatch.setattr(f"genesis.core.use_cases.{module}.default_registry", _registry)
    return shell, git


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "genesis" in result.output
        for command in ("init", "project", "module", "install", "clean", "generate", "build"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


# ── Workspace editing ───────────────────────────────────────────────


class TestInitCommand:
    def test_init_with_name(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "init", "--name", "Demo"])
        assert result.exit_code == 0
        assert "Done!" in result.output
        assert WorkspaceStore(tmp_path).load().name == "Demo"

    def test_init_prompts_for_name(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "init"], input="\n")
        assert result.exit_code == 0
        assert WorkspaceStore(tmp_path).load().name == tmp_path.resolve().name

    def test_init_declined_keeps_file(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "init", "--name", "X"], input="n\n")
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert WorkspaceStore(workspace_dir).load().name == "Demo"

    def test_init_confirmed_replaces(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "init", "--name", "X"], input="y\n")
        assert result.exit_code == 0
        assert WorkspaceStore(workspace_dir).load().name == "X"


class TestProjectCommand:
    def test_options(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "project",
            "--name", "Tools", "--group", "Engine", "--type", "ConsoleApp", "--own-includes",
        ])
        assert result.exit_code == 0, result.output
        assert "Engine-Tools" in result.output
        doc = WorkspaceStore(workspace_dir).load()
        assert doc.projects["Engine"]["Tools"].type == "ConsoleApp"

    def test_prompts_with_defaults(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "project"], input="\n\n\n\n")
        assert result.exit_code == 0, result.output
        project = WorkspaceStore(workspace_dir).load().projects["Group"]["Project"]
        assert project.type == "StaticLib"
        assert project.include_dirs == ["%{wks.location}/Group/src/Project/"]

    def test_duplicate_fails(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "project",
            "--name", "Core", "--group", "Engine", "--type", "StaticLib", "--own-includes",
        ])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert "Failed!" in result.output

    def test_invalid_type(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "project",
            "--name", "X", "--group", "G", "--type", "Shared", "--own-includes",
        ])
        assert result.exit_code != 0


class TestModuleCommand:
    def test_options(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "module",
            "--packet", "git-clone", "--repo", "https://example/imgui.git",
            "--name", "imgui", "--library", "premake", "--include", "., backends",
            "--script", "%{wks.location}/.genesis/imgui.lua",
        ])
        assert result.exit_code == 0, result.output
        module = WorkspaceStore(workspace_dir).load().modules["imgui"]
        assert module.include_dirs == [".", "backends"]
        assert module.packet.repo == "https://example/imgui.git"

    def test_prompts(self, workspace_dir: Path):
        runner = CliRunner()
        # packet, repo, name, library, include, script
        result = runner.invoke(
            cli,
            ["--root", str(workspace_dir), "module"],
            input="\nhttps://example/spdlog.git\nspdlog\n\n\n\n",
        )
        assert result.exit_code == 0, result.output
        module = WorkspaceStore(workspace_dir).load().modules["spdlog"]
        assert module.include_dirs == ["include/"]
        assert module.library.script == "%{wks.location}/.genesis/spdlog.lua"

    def test_duplicate_fails(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "module",
            "--repo", "r", "--name", "glfw", "--include", "include/", "--script", "s.lua",
        ], input="\n\n")
        assert result.exit_code == 1
        assert "Module glfw already exists" in result.output


class TestLinkCommand:
    def test_link(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "link", "Engine-Sandbox", "glfw"])
        assert result.exit_code == 0, result.output
        project = WorkspaceStore(workspace_dir).load().projects["Engine"]["Sandbox"]
        assert project.dependencies == ["Engine-Core", "glfw"]

    def test_unknown(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "link", "Engine-Sandbox", "nope"])
        assert result.exit_code == 1


# ── Operations ──────────────────────────────────────────────────────


class TestInstallCommand:
    def test_install(self, workspace_dir: Path, mocked_tools):
        _, git = mocked_tools
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "install"])
        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        assert "took" in result.output
        assert git.calls[0]["destination"] == "./.genesis/modules/glfw"

    def test_alias(self, workspace_dir: Path, mocked_tools):
        _, git = mocked_tools
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "i"])
        assert result.exit_code == 0
        assert git.call_count == 1

    def test_clone_failure(self, workspace_dir: Path, mocked_tools):
        _, git = mocked_tools
        git.set_failure("clone:glfw")
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "install"])
        assert result.exit_code == 1
        assert "Failed!" in result.output

    def test_not_a_workspace(self, tmp_path: Path, mocked_tools):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "install"])
        assert result.exit_code == 1
        assert "genesis.json" in result.output


class TestCleanCommand:
    def test_clean(self, workspace_dir: Path):
        (workspace_dir / "bin").mkdir()
        (workspace_dir / "Demo.sln").write_text("")
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "clean"])
        assert result.exit_code == 0
        assert "Removed bin/" in result.output
        assert not (workspace_dir / "Demo.sln").exists()


class TestGenerateCommand:
    def test_list(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--list"])
        assert result.exit_code == 0
        assert "vscode" in result.output
        assert "premake" in result.output

    def test_vscode(self, workspace_dir: Path, mocked_tools):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "generate", "vscode", "--arch", "x86", "--config", "Release",
        ])
        assert result.exit_code == 0, result.output
        assert ".vscode/launch.json" in result.output
        launch = json.loads((workspace_dir / ".vscode" / "launch.json").read_text())
        assert launch["configurations"][0]["name"] == "Engine-Sandbox-Release"

    def test_bad_arch(self, workspace_dir: Path, mocked_tools):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "generate", "vscode", "--arch", "arm99"])
        assert result.exit_code == 1
        assert "arm99" in result.output
        assert not (workspace_dir / ".vscode").exists()

    def test_unknown_generator(self, workspace_dir: Path, mocked_tools):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "generate", "cmake"])
        assert result.exit_code == 1
        assert "Unknown generator 'cmake'" in result.output
        assert "vscode" in result.output
        assert "premake" in result.output

    def test_premake(self, workspace_dir: Path, mocked_tools):
        shell, _ = mocked_tools
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "generate", "premake", "--action", "gmake2"])
        assert result.exit_code == 0, result.output
        assert shell.calls[0]["argv"] == ["premake5", "gmake2"]
        assert (workspace_dir / ".genesis" / "workspace.lua").is_file()


class TestBuildCommand:
    def test_build(self, workspace_dir: Path, mocked_tools):
        shell, _ = mocked_tools
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "build", "--toolchain", "make"])
        assert result.exit_code == 0, result.output
        assert shell.calls[0]["argv"] == ["make", "config=debug_x86_64"]

    def test_unknown_toolchain(self, workspace_dir: Path, mocked_tools):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "build", "--toolchain", "ninja"])
        assert result.exit_code == 1
        assert "msbuild, make" in result.output


class TestStatusCommand:
    def test_status(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "status"])
        assert result.exit_code == 0
        assert "Demo" in result.output
        assert "Engine-Sandbox" in result.output
        assert "glfw" in result.output

    def test_status_json(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "status", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["workspace"]["name"] == "Demo"

    def test_status_missing(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "status"])
        assert result.exit_code == 1


class TestConfigCheckCommand:
    def test_valid(self, workspace_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(workspace_dir), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()

    def test_invalid_json(self, tmp_path: Path, write_workspace):
        write_workspace(tmp_path, {"name": "W", "projects": {"G": {"P": {"Q": {"type": "StaticLib"}}}}})
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert "G/P" in data["errors"][0]


class TestUnreadableConfiguration:
    def test_status_reports_bad_encoding(self, tmp_path: Path):
        (tmp_path / "genesis.json").write_bytes(b'{"name": "W\xff", "projects": {}}')
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "status"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "Cannot read" in result.output

    def test_generate_reports_bad_settings_encoding(self, workspace_dir: Path, mocked_tools):
        (workspace_dir / ".genesis").mkdir()
        (workspace_dir / ".genesis" / "settings.yml").write_bytes(b"premake: \xff\xfe\n")
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--root", str(workspace_dir), "generate", "vscode", "--arch", "x64", "--config", "Debug",
        ])
        assert result.exit_code == 1
        assert "Invalid settings file" in result.output
        assert not (workspace_dir / ".vscode").exists()
