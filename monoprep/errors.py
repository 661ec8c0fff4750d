"""Error types and formatting utilities for consistent error messages.

Every failure of a consolidation run is fatal. The exception types below carry
enough context (project, package name, path, exit status) to diagnose the
problem without re-running.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Field errors use structured format: '<entity> field '<field>' <issue>'
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""

from pathlib import Path


class ConsolidationError(Exception):
    """Base class for all errors that abort a consolidation run."""


class ConfigurationError(ConsolidationError):
    """The workspace descriptor or the project registry is invalid.

    Raised before any filesystem mutation takes place.
    """


class ClassificationError(ConsolidationError):
    """A dependency declaration of a project is malformed."""

    def __init__(self, message: str, project: str, package: str | None = None):
        super().__init__(message)
        self.project = project
        self.package = package


class IOFailure(ConsolidationError):
    """Reset, folder creation or manifest write failed."""

    def __init__(self, message: str, path: Path | str):
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class ExternalToolFailure(ConsolidationError):
    """The external package manager exited with a non-zero status."""

    def __init__(self, command: str, exit_status: int):
        super().__init__(f'"{command}" failed with exit status {exit_status}')
        self.command = command
        self.exit_status = exit_status


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("file not found")
        'Error: file not found'
    """
    return f"Error: {message}"


def format_field_error(entity: str, field: str, issue: str) -> str:
    """Format a field validation error with structured format.

    Args:
        entity: Name of the entity being validated (e.g., "projects[0]")
        field: Name of the field that failed validation
        issue: Description of the issue (e.g., "must be a non-empty string")

    Examples:
        >>> format_field_error("projects[0]", "packageName", "is required")
        "projects[0] field 'packageName' is required"
    """
    return f"{entity} field '{field}' {issue}"


__all__ = [
    "ConsolidationError",
    "ConfigurationError",
    "ClassificationError",
    "IOFailure",
    "ExternalToolFailure",
    "format_error",
    "format_field_error",
]
