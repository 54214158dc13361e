"""
Generator registry — the fixed set of generators, keyed by name.

The set is closed: generators are listed here explicitly rather than
discovered at runtime.
"""

from __future__ import annotations

from genesis.core.services.generators.base import Generator
from genesis.core.services.generators.premake import BuildStubGenerator
from genesis.core.services.generators.vscode import VSCodeLaunchGenerator

_GENERATORS: dict[str, Generator] = {
    gen.name: gen
    for gen in (
        VSCodeLaunchGenerator(),
        BuildStubGenerator(),
    )
}


def resolve(name: str | None) -> Generator | None:
    """Look up a generator by name (case-insensitive)."""
    if not name:
        return None
    return _GENERATORS.get(name.strip().lower())


def list_generators() -> list[tuple[str, str]]:
    """``(name, description)`` for every registered generator."""
    return [(gen.name, gen.description) for gen in _GENERATORS.values()]


def generator_names() -> list[str]:
    return list(_GENERATORS)
