"""Shared utility functions for commands."""

import sys
from pathlib import Path

import click

from monoprep.config import WorkspaceConfig, load_workspace_config
from monoprep.errors import (
    ClassificationError,
    ConfigurationError,
    ConsolidationError,
    ExternalToolFailure,
    IOFailure,
    format_error,
)
from monoprep.registry import Registry, load_registry

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 4
EXIT_CLASSIFICATION_ERROR = 5
EXIT_IO_ERROR = 6
EXIT_INSTALL_FAILED = 7


def exit_code_for(error: ConsolidationError) -> int:
    """Map an engine error to the process exit code.

    >>> exit_code_for(IOFailure("Failed to write manifest", "common/package.json"))
    6
    """
    if isinstance(error, ConfigurationError):
        return EXIT_CONFIG_ERROR
    if isinstance(error, ClassificationError):
        return EXIT_CLASSIFICATION_ERROR
    if isinstance(error, IOFailure):
        return EXIT_IO_ERROR
    if isinstance(error, ExternalToolFailure):
        return EXIT_INSTALL_FAILED
    return 1


def fail(error: ConsolidationError) -> None:
    """Report an engine error on stderr and exit."""
    click.echo(format_error(str(error)), err=True)
    sys.exit(exit_code_for(error))


def load_workspace(ctx: click.Context) -> tuple[WorkspaceConfig, Registry]:
    """Load the descriptor given with --config (or discovered) and its registry."""
    config_path = ctx.obj.get("config_path")
    config = load_workspace_config(Path(config_path) if config_path else None)
    return config, load_registry(config)
