"""Generate command implementation."""

import logging

import click

from monoprep import ConsolidationError, setup_logging
from monoprep.engine import (
    FileSystemWorkspace,
    NpmInstaller,
    consolidate,
    plan_consolidation,
    render_plan,
)
from monoprep.commands.utils import fail, load_workspace

_logging = logging.getLogger(__name__)


@click.command()
@click.option(
    "--fast",
    "-f",
    is_flag=True,
    help="Keep common/node_modules and skip \"npm shrinkwrap\". "
    "This is faster, but less correct.",
)
@click.option(
    "--lazy",
    "-l",
    is_flag=True,
    hidden=True,
    help="Alias for --fast.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be generated without touching the disk",
)
@click.pass_context
def generate(ctx, fast: bool, lazy: bool, dry_run: bool):
    """Run this command after changing any project's package.json.

    Scans the dependencies of every project listed in the workspace
    descriptor, writes one temp project per project plus a common
    package.json that references them all, then runs "npm install" once.
    """
    debug = ctx.obj.get("debug", False)
    setup_logging(debug)
    fast = fast or lazy

    try:
        config, registry = load_workspace(ctx)

        if dry_run:
            plan = plan_consolidation(registry, fast=fast)
            click.echo(render_plan(plan))
            return

        click.echo(f"Starting \"monoprep generate\" in {config.common_path}\n")
        result = consolidate(
            registry,
            FileSystemWorkspace(config.common_path),
            NpmInstaller(config.npm_tool),
            fast=fast,
        )
        for location in result.written:
            _logging.debug(f"Wrote {location}")
    except ConsolidationError as e:
        _logging.debug(f"generate aborted: {type(e).__name__}")
        fail(e)
        return

    click.secho(
        f"monoprep generate finished successfully. ({result.elapsed:.2f} seconds)",
        fg="green",
    )
    click.echo("\nNext you should probably link the local projects into place.")
