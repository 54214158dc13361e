"""
CLI commands that edit genesis.json: init, project, module, link.

Values not given as options are prompted for interactively.
"""

from __future__ import annotations

import time
from pathlib import Path

import click

from genesis.core.models.workspace import GIT_CLONE_PACKET, PREMAKE_LIBRARY, ProjectType
from genesis.core.services.registration import DEFAULT_MODULE_INCLUDE, default_library_script
from genesis.ui.cli.output import error, finish, resolve_root


@click.command()
@click.option("--name", "-n", default=None, help="Workspace name (default: directory name).")
@click.option("--force", is_flag=True, help="Replace an existing genesis.json without asking.")
@click.pass_context
def init(ctx: click.Context, name: str | None, force: bool) -> None:
    """Initialize a new genesis workspace in the current directory."""
    from genesis.core.persistence.workspace_file import WorkspaceStore
    from genesis.core.use_cases.register import init_workspace

    root = (resolve_root(ctx) or Path.cwd()).resolve()
    store = WorkspaceStore(root)

    if store.exists() and not force:
        if not click.confirm("genesis.json already exists. Replace it?", default=False):
            click.secho("Aborted.", fg="yellow")
            return
        force = True

    if name is None:
        name = click.prompt("Workspace name", default=root.name)

    started = time.monotonic()
    result = init_workspace(name, root=root, force=force)
    if result.error:
        error(result.error)
    else:
        click.echo(f"   Created {result.config_path}")
    finish(result.ok, started)


@click.command()
@click.option("--name", prompt="Project name", default="Project", help="Project name.")
@click.option("--group", prompt="Project group", default="Group", help="Group the project belongs to.")
@click.option(
    "--type",
    "project_type",
    prompt="Project type",
    type=click.Choice([t.value for t in ProjectType]),
    default=ProjectType.STATIC_LIB.value,
    help="Kind of project.",
)
@click.option(
    "--own-includes/--no-own-includes",
    prompt="Add the project's own include directory?",
    default=True,
    help="Add <group>/src/<name>/ to the include directories.",
)
@click.pass_context
def project(
    ctx: click.Context,
    name: str,
    group: str,
    project_type: str,
    own_includes: bool,
) -> None:
    """Add a new project to genesis.json."""
    from genesis.core.use_cases.register import register_project

    started = time.monotonic()
    result = register_project(
        name=name,
        group=group,
        type=project_type,
        own_includes=own_includes,
        root=resolve_root(ctx),
    )
    if result.error:
        error(result.error)
    else:
        click.echo(f"   Added project {result.entry}")
    finish(result.ok, started)


@click.command()
@click.option(
    "--packet",
    "packet_type",
    prompt="Packet type",
    type=click.Choice([GIT_CLONE_PACKET]),
    default=GIT_CLONE_PACKET,
    help="How the module's sources are acquired.",
)
@click.option("--repo", prompt="Repository url", help="Repository to clone.")
@click.option("--name", prompt="Module name", help="Module name.")
@click.option(
    "--library",
    "library_type",
    prompt="Library type",
    type=click.Choice([PREMAKE_LIBRARY]),
    default=PREMAKE_LIBRARY,
    help="How the module is built.",
)
@click.option(
    "--include",
    prompt="Include directories (comma separated)",
    default=DEFAULT_MODULE_INCLUDE,
    help="Comma-separated include directories.",
)
@click.option("--script", default=None, help="premake script of the module.")
@click.pass_context
def module(
    ctx: click.Context,
    packet_type: str,
    repo: str,
    name: str,
    library_type: str,
    include: str,
    script: str | None,
) -> None:
    """Add a new module to genesis.json."""
    from genesis.core.use_cases.register import register_module

    if script is None:
        script = click.prompt("Library script", default=default_library_script(name.strip()))

    started = time.monotonic()
    result = register_module(
        name=name,
        repo=repo,
        include=include,
        script=script,
        library_type=library_type,
        root=resolve_root(ctx),
    )
    if result.error:
        error(result.error)
    else:
        click.echo(f"   Added module {result.entry} ({packet_type})")
    finish(result.ok, started)


@click.command()
@click.argument("project_id")
@click.argument("dependency")
@click.pass_context
def link(ctx: click.Context, project_id: str, dependency: str) -> None:
    """Make PROJECT_ID depend on a project or module."""
    from genesis.core.use_cases.register import register_dependency

    started = time.monotonic()
    result = register_dependency(project_id, dependency, root=resolve_root(ctx))
    if result.error:
        error(result.error)
    else:
        click.echo(f"   {project_id} → {dependency}")
    finish(result.ok, started)
