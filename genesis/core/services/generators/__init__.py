"""
Generators — turn the flattened workspace into IDE and build artifacts.

Each generator implements ``Generator.generate(context, options)`` and
returns a ``GenerationResult``. Look generators up by name with
``resolve()``; ``list_generators()`` is what users see when a name is
unknown.
"""

from genesis.core.services.generators.base import (
    GenerationResult,
    Generator,
    GeneratorContext,
    replace_generated_files,
    write_generated_file,
)
from genesis.core.services.generators.registry import (
    generator_names,
    list_generators,
    resolve,
)

__all__ = [
    "GenerationResult",
    "Generator",
    "GeneratorContext",
    "generator_names",
    "list_generators",
    "replace_generated_files",
    "resolve",
    "write_generated_file",
]
