"""Format config command implementation."""

import json
import sys
import uuid
from pathlib import Path

import click

from monoprep import ConfigurationError, find_descriptor, format_error
from monoprep.config import load_descriptor


@click.command(name="fmt")
@click.argument("file", required=False, type=click.Path())
@click.option(
    "--write",
    "-w",
    is_flag=True,
    help="Overwrite the file instead of printing to stdout",
)
@click.pass_context
def config_fmt(ctx, file: str | None, write: bool):
    """Format a workspace descriptor as strict JSON.

    Trailing commas and // comments are accepted on input but not preserved.

    FILE: Path to the descriptor (default: --config or the discovered monoprep.json)
    """
    path = file or ctx.obj.get("config_path")
    file_path = Path(path) if path else find_descriptor()

    if file_path is None or not file_path.exists():
        click.echo(format_error(f"File not found: {file_path or 'monoprep.json'}"), err=True)
        sys.exit(1)

    try:
        data = load_descriptor(file_path)
    except ConfigurationError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    formatted = json.dumps(data, indent=2, sort_keys=False, ensure_ascii=False)

    if not write:
        click.echo(formatted)
        return

    if file_path.suffix.lower() != ".json":
        click.echo(format_error(f"Refusing to write JSON into {file_path}"), err=True)
        sys.exit(1)

    temp_path = file_path.with_suffix(f".tmp.{uuid.uuid4().hex[:8]}")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(formatted)
            f.write("\n")
        temp_path.replace(file_path)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        click.echo(format_error(f"Error writing file: {e}"), err=True)
        sys.exit(1)

    click.echo(f"Formatted {file_path}")
