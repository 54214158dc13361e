"""
Shared console output for CLI commands.

Every operation ends with one coloured line: ``Done!`` or ``Failed!``
followed by the elapsed wall-clock time.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import click


def resolve_root(ctx: click.Context) -> Path | None:
    """Workspace search directory from ``--root`` (None = cwd)."""
    return ctx.obj.get("root") if ctx.obj else None


def error(message: str) -> None:
    click.secho(f"❌ {message}", fg="red")


def finish(ok: bool, started: float) -> None:
    """Print the outcome line and exit 1 on failure.

    Args:
        ok: Whether the operation succeeded.
        started: ``time.monotonic()`` taken when the operation began.
    """
    took = time.monotonic() - started
    if ok:
        click.secho("Done! ", fg="green", bold=True, nl=False)
    else:
        click.secho("Failed! ", fg="red", bold=True, nl=False)
    click.secho(f"took {took:.2f}s", fg="bright_black")

    if not ok:
        sys.exit(1)
