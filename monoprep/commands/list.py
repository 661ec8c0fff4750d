"""List command implementation."""

import click

from monoprep import ConsolidationError, setup_logging
from monoprep.engine import classify
from monoprep.commands.utils import fail, load_workspace


@click.command(name="list")
@click.option(
    "--verbose", "-v", is_flag=True, help="Show local dependencies of each project"
)
@click.pass_context
def list_projects(ctx, verbose: bool):
    """List all projects and their temp project names."""
    setup_logging(ctx.obj.get("debug", False))

    try:
        _, registry = load_workspace(ctx)
        classifications = (
            {p.package_name: classify(p, registry) for p in registry} if verbose else {}
        )
    except ConsolidationError as e:
        fail(e)
        return

    for project in registry:
        if not verbose:
            click.echo(f"{project.package_name}: {project.temp_project_name}")
            continue

        classification = classifications[project.package_name]
        click.echo(f"• {project.package_name}")
        click.echo(f"  Temp project: {project.temp_project_name}")
        click.echo(f"  Folder: {project.project_folder}")
        click.echo(f"  External dependencies: {len(classification.external)}")
        local = [d.package_name for d in classification.local]
        click.echo(f"  Local dependencies: {', '.join(local) if local else 'none'}")
        click.echo("")
