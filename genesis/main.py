"""
genesis — CLI entrypoint.

Usage:
    python -m genesis.main --help
    genesis init
    genesis project
    genesis install
    genesis generate vscode --arch x64 --config Debug
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path

import click

from genesis import __version__
from genesis.core.observability.logging_config import setup_logging
from genesis.ui.cli.output import error, finish, resolve_root


@click.group()
@click.version_option(version=__version__, prog_name="genesis")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--root",
    "-C",
    "root",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to look for genesis.json from (default: cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    root: str | None,
) -> None:
    """genesis — scaffold and drive premake workspaces."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["root"] = Path(root) if root else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GENESIS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("GENESIS_LOG_FILE"),
        log_file_level=os.environ.get("GENESIS_LOG_FILE_LEVEL"),
    )


def _print_receipts(receipts: list) -> None:
    for receipt in receipts:
        label = receipt.action_id
        timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
        if receipt.ok:
            click.secho(f"   ✓ {label}", fg="green", nl=False)
            click.echo(timing)
        else:
            click.secho(f"   ✗ {label}", fg="red", nl=False)
            click.echo(timing)
            if receipt.error:
                click.echo(f"     │ {receipt.error}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show workspace status summary."""
    from genesis.core.use_cases.status import get_status

    result = get_status(root=resolve_root(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    workspace = result.workspace
    if result.error or workspace is None:
        error(result.error or "No workspace")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        click.secho(f"\n📋 {workspace.name}", fg="cyan", bold=True)
        click.echo(f"   {result.workspace_root}")
        click.echo()

    click.secho(f"   Projects: {len(workspace.projects)}", fg="white", bold=True)
    for pid, proj in workspace.projects.items():
        hidden = " (hidden)" if proj.hide else ""
        deps = f"  → {', '.join(proj.dependencies)}" if proj.dependencies else ""
        click.echo(f"     • {pid} [{proj.type}]{hidden}{deps}")

    click.echo()
    click.secho(f"   Modules: {len(workspace.modules)}", fg="white", bold=True)
    for mid, mod in workspace.modules.items():
        packet = f" [{mod.packet.type}]" if mod.packet else ""
        installed = " ✓" if result.installed.get(mid) else ""
        click.echo(f"     • {mid}{packet}{installed}")

    if ctx.obj.get("verbose"):
        click.echo()
        click.secho("   Generators:", fg="white", bold=True)
        for name, desc in result.generators:
            click.echo(f"     • {name} — {desc}")

    click.echo()


@cli.group()
def config() -> None:
    """Workspace configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate genesis.json."""
    from genesis.core.use_cases.config_check import check_config

    result = check_config(root=resolve_root(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid and result.workspace is not None:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Workspace: {result.workspace.name}")
        click.echo(f"   Projects: {len(result.workspace.projects)}")
        click.echo(f"   Modules: {len(result.workspace.modules)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@cli.command()
@click.pass_context
def install(ctx: click.Context) -> None:
    """Install the packets of every module."""
    from genesis.core.use_cases.install import install_modules

    started = time.monotonic()
    result = install_modules(root=resolve_root(ctx))

    if result.report:
        _print_receipts(result.report.receipts)
        for mid in result.report.present:
            click.secho(f"   ⊘ {mid} (already installed)", fg="bright_black")
    if result.error:
        error(result.error)
    finish(result.ok, started)


cli.add_command(install, "i")


@cli.command()
@click.pass_context
def clean(ctx: click.Context) -> None:
    """Remove build output and generated project files."""
    from genesis.core.use_cases.clean import clean as clean_workspace

    started = time.monotonic()
    result = clean_workspace(root=resolve_root(ctx))

    if result.report and not ctx.obj.get("quiet"):
        for path in result.report.removed_dirs:
            click.secho(f"   Removed {path}", fg="bright_black")
        click.secho(
            f"   Deleted {len(result.report.removed_files)} generated files",
            fg="bright_black",
        )
    if result.error:
        error(result.error)
    finish(result.ok, started)


@cli.command()
@click.argument("name", required=False)
@click.option("--arch", "architecture", default="x64", show_default=True, help="Target architecture.")
@click.option("--config", "configuration", default="Debug", show_default=True, help="Build configuration.")
@click.option("--action", default=None, help="premake action (default: from settings).")
@click.option("--list", "list_only", is_flag=True, help="List available generators.")
@click.pass_context
def generate(
    ctx: click.Context,
    name: str | None,
    architecture: str,
    configuration: str,
    action: str | None,
    list_only: bool,
) -> None:
    """Run a generator (vscode, premake).

    Examples:

        genesis generate premake

        genesis generate vscode --arch x86 --config Release
    """
    from genesis.core.services.generators import list_generators
    from genesis.core.use_cases.generate import run_generator

    if list_only or not name:
        click.secho("Available generators:", bold=True)
        for gen_name, desc in list_generators():
            click.echo(f"   • {gen_name} — {desc}")
        return

    started = time.monotonic()
    options = {"architecture": architecture, "configuration": configuration}
    if action:
        options["action"] = action
    result = run_generator(name, options, root=resolve_root(ctx))

    if result.generation:
        for path in result.generation.files:
            click.secho(f"   ✓ {path}", fg="green")
        if ctx.obj.get("verbose"):
            for path in result.generation.skipped:
                click.secho(f"   ⊘ {path} (kept)", fg="bright_black")
        _print_receipts(result.generation.receipts)

    if result.error:
        error(result.error)
    if result.available:
        click.echo("   Available generators:")
        for gen_name, desc in result.available:
            click.echo(f"     • {gen_name} — {desc}")
    finish(result.ok, started)


@cli.command()
@click.option("--toolchain", "-t", default="msbuild", show_default=True, help="Build toolchain (msbuild, make).")
@click.option("--arch", "architecture", default="x64", show_default=True, help="Target architecture.")
@click.option("--config", "configuration", default="Debug", show_default=True, help="Build configuration.")
@click.pass_context
def build(ctx: click.Context, toolchain: str, architecture: str, configuration: str) -> None:
    """Compile the workspace with a build toolchain."""
    from genesis.core.use_cases.build import build_workspace

    started = time.monotonic()
    result = build_workspace(
        toolchain=toolchain,
        architecture=architecture,
        configuration=configuration,
        root=resolve_root(ctx),
    )

    if result.command and ctx.obj.get("verbose"):
        click.secho(f"   $ {' '.join(result.command)}", fg="bright_black")
    if result.error:
        error(result.error)
    if result.choices:
        click.echo(f"   Valid choices: {', '.join(result.choices)}")
    finish(result.ok, started)


# ── Register workspace editing commands from genesis/ui/cli/ ──────

from genesis.ui.cli.workspace import init, link, module, project  # noqa: E402

cli.add_command(init)
cli.add_command(project)
cli.add_command(module)
cli.add_command(link)


if __name__ == "__main__":
    cli()
