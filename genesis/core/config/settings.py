"""
Tool settings — which external executables genesis drives, and where
build output lands.

Settings come from an optional ``.genesis/settings.yml`` next to
genesis.json, then environment variables override individual fields:

    GENESIS_GIT, GENESIS_PREMAKE, GENESIS_PREMAKE_ACTION,
    GENESIS_MSBUILD, GENESIS_MAKE
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from genesis.core.config.loader import GENESIS_DIR, ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yml"

_ENV_OVERRIDES: dict[str, str] = {
    "GENESIS_GIT": "git",
    "GENESIS_PREMAKE": "premake",
    "GENESIS_PREMAKE_ACTION": "premake_action",
    "GENESIS_MSBUILD": "msbuild",
    "GENESIS_MAKE": "make",
}


class ToolSettings(BaseModel):
    """External tool names and output layout."""

    git: str = "git"
    premake: str = "premake5"
    premake_action: str = "vs2022"
    msbuild: str = "msbuild"
    make: str = "make"

    executable_extension: str = "exe"
    output_root: str = "bin"
    intermediate_root: str = "bin-int"

    # None = wait for the process to exit on its own
    process_timeout: int | None = Field(default=None, ge=1)


def settings_path(root: Path) -> Path:
    """Location of the settings file for a workspace root."""
    return root / GENESIS_DIR / SETTINGS_FILE


def load_settings(root: Path | None = None) -> ToolSettings:
    """Load tool settings for a workspace.

    Args:
        root: Workspace root. ``None`` skips the settings file and only
            applies environment overrides.

    Raises:
        ConfigError: If the settings file is not valid YAML or has
            invalid values.
    """
    data: dict = {}

    if root is not None:
        path = settings_path(root)
        if path.is_file():
            logger.debug("Loading tool settings from %s", path)
            try:
                loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
                raise ConfigError(f"Invalid settings file {path}: {e}") from e
            if loaded is not None and not isinstance(loaded, dict):
                raise ConfigError(
                    f"Expected a YAML mapping in {path}, got {type(loaded).__name__}"
                )
            data.update(loaded or {})

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    try:
        return ToolSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid tool settings: {e}") from e
