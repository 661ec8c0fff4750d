"""CLI command definitions for monoprep."""

import click

from monoprep import __version__
from monoprep.commands.config import config
from monoprep.commands.generate import generate
from monoprep.commands.list import list_projects


@click.group()
@click.version_option(__version__, prog_name="monoprep")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the workspace descriptor (default: search for monoprep.json)",
)
@click.pass_context
def cli(ctx, debug, config_path):
    """Install all projects of a monorepo with a single package-manager run."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path


cli.add_command(generate)
cli.add_command(list_projects, name="list")
cli.add_command(config)

__all__ = [
    "cli",
]


if __name__ == "__main__":
    cli()
