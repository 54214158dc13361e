"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from genesis.adapters.mock import MockAdapter
from genesis.adapters.registry import AdapterRegistry


def _write_workspace(root: Path, data: dict) -> Path:
    path = root / "genesis.json"
    path.write_text(json.dumps(data, indent=4))
    return path


@pytest.fixture
def write_workspace():
    """Write a genesis.json into a directory and return its path."""
    return _write_workspace


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep tool overrides from the developer's shell out of tests."""
    for name in (
        "GENESIS_GIT",
        "GENESIS_PREMAKE",
        "GENESIS_PREMAKE_ACTION",
        "GENESIS_MSBUILD",
        "GENESIS_MAKE",
        "GENESIS_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_workspace() -> dict:
    """A grouped workspace with one app, one lib and one module."""
    return {
        "name": "Demo",
        "projects": {
            "Engine": {
                "Core": {
                    "type": "StaticLib",
                    "includeDirs": ["%{wks.location}/Engine/src/Core/"],
                    "dependencies": ["glfw"],
                },
                "Sandbox": {
                    "type": "ConsoleApp",
                    "includeDirs": ["%{wks.location}/Engine/src/Sandbox/"],
                    "dependencies": ["Engine-Core"],
                },
            },
        },
        "modules": {
            "glfw": {
                "type": "premake",
                "includeDirs": ["include/"],
                "dependencies": [],
                "packet": {"type": "git-clone", "repo": "https://example/glfw.git"},
                "library": {"type": "premake", "script": "%{wks.location}/.genesis/glfw.lua"},
            },
        },
    }


@pytest.fixture
def workspace_dir(tmp_path: Path, sample_workspace: dict) -> Path:
    """Temporary workspace root containing the sample genesis.json."""
    _write_workspace(tmp_path, sample_workspace)
    return tmp_path


@pytest.fixture
def shell_mock() -> MockAdapter:
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def git_mock() -> MockAdapter:
    return MockAdapter(adapter_name="git")


@pytest.fixture
def mock_registry(shell_mock: MockAdapter, git_mock: MockAdapter) -> AdapterRegistry:
    """Registry whose shell and git adapters only record calls."""
    registry = AdapterRegistry()
    registry.register(shell_mock)
    registry.register(git_mock)
    return registry
