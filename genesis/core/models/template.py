"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by a generator.

    Attributes:
        path:      Path relative to the workspace root (forward slashes).
        content:   Full file content.
        overwrite: Replace an existing file. Stubs the user is expected
                   to edit are written with ``overwrite=False``.
    """

    path: str
    content: str
    overwrite: bool = False
