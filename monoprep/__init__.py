"""monoprep: install every project of a monorepo with one package-manager run."""

import logging
import sys

from .config import (
    ProjectConfig,
    WorkspaceConfig,
    load_descriptor,
    load_workspace_config,
    preprocess_jsonish,
    validate_descriptor,
)
from .errors import (
    ClassificationError,
    ConfigurationError,
    ConsolidationError,
    ExternalToolFailure,
    IOFailure,
    format_error,
    format_field_error,
)
from .execution import run_command
from .paths import find_descriptor
from .registry import Manifest, Project, Registry, load_registry

__version__ = "0.1.0"


def setup_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG level when debug is on."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


__all__ = [
    "__version__",
    "setup_logging",
    "ProjectConfig",
    "WorkspaceConfig",
    "load_descriptor",
    "load_workspace_config",
    "preprocess_jsonish",
    "validate_descriptor",
    "ConsolidationError",
    "ConfigurationError",
    "ClassificationError",
    "IOFailure",
    "ExternalToolFailure",
    "format_error",
    "format_field_error",
    "run_command",
    "find_descriptor",
    "Manifest",
    "Project",
    "Registry",
    "load_registry",
]
