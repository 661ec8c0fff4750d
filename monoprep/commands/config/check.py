"""Check config command implementation."""

from pathlib import Path

import click

from monoprep import ConsolidationError, setup_logging
from monoprep.config import load_workspace_config
from monoprep.registry import load_registry
from monoprep.commands.utils import fail


@click.command(name="check")
@click.argument("file", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def config_check(ctx, file: str | None):
    """Validate a workspace descriptor and every project's package.json.

    FILE: Path to the descriptor (default: --config or the discovered monoprep.json)
    """
    setup_logging(ctx.obj.get("debug", False))
    path = file or ctx.obj.get("config_path")

    try:
        config = load_workspace_config(Path(path) if path else None)
        registry = load_registry(config)
    except ConsolidationError as e:
        fail(e)
        return

    click.echo(f"✅ {len(registry)} projects, common folder: {config.common_path}")
