"""
Architectures and build toolchains.

An abstract architecture name (``x86``, ``x64``) maps onto the naming
conventions of the two downstream tools: msbuild's ``Platform`` and
premake's ``architecture``. Build toolchains turn an
(architecture, configuration) pair into the command that compiles the
workspace.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from genesis.core.config.settings import ToolSettings


class Architecture(NamedTuple):
    msb: str        # msbuild /p:Platform value
    premake: str    # premake architecture / output directory name


ARCHITECTURES: dict[str, Architecture] = {
    "x86": Architecture(msb="x86", premake="x86"),
    "x64": Architecture(msb="x64", premake="x86_64"),
}


def resolve_architecture(name: str | None) -> Architecture | None:
    """Look up an architecture by its abstract name (case-insensitive)."""
    if not name:
        return None
    return ARCHITECTURES.get(name.strip().lower())


def supported_architectures() -> list[str]:
    return sorted(ARCHITECTURES)


# ── Build toolchains ────────────────────────────────────────────


def msbuild_command(
    settings: ToolSettings,
    workspace: str,
    arch: Architecture,
    configuration: str,
) -> list[str]:
    """``msbuild <workspace>.sln /p:Configuration=<cfg> /p:Platform=<arch>``."""
    return [
        settings.msbuild,
        f"{workspace}.sln",
        f"/p:Configuration={configuration}",
        f"/p:Platform={arch.msb}",
    ]


def make_command(
    settings: ToolSettings,
    workspace: str,
    arch: Architecture,
    configuration: str,
) -> list[str]:
    """``make config=<cfg>_<arch>`` as premake's gmake2 action expects."""
    return [settings.make, f"config={configuration.lower()}_{arch.premake}"]


class Toolchain(NamedTuple):
    name: str
    description: str
    command: Callable[[ToolSettings, str, Architecture, str], list[str]]


TOOLCHAINS: dict[str, Toolchain] = {
    "msbuild": Toolchain("msbuild", "Visual Studio solution via msbuild", msbuild_command),
    "make": Toolchain("make", "GNU make (premake gmake2 output)", make_command),
}


def resolve_toolchain(name: str | None) -> Toolchain | None:
    """Look up a build toolchain by name (case-insensitive)."""
    if not name:
        return None
    return TOOLCHAINS.get(name.strip().lower())


def list_toolchains() -> list[tuple[str, str]]:
    """``(name, description)`` for every toolchain."""
    return [(tc.name, tc.description) for tc in TOOLCHAINS.values()]
