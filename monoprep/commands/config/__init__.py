"""Workspace descriptor commands."""

import click

from monoprep.commands.config.check import config_check
from monoprep.commands.config.fmt import config_fmt


@click.group()
def config():
    """Workspace descriptor commands."""
    pass


config.add_command(config_check, name="check")
config.add_command(config_fmt, name="fmt")
