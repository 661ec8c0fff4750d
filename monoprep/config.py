"""Workspace descriptor loading and validation.

The descriptor lists every project of the monorepo. It is JSON-ish by default
(``//`` line comments and trailing commas are tolerated) and may also be
written as YAML.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigurationError, format_field_error
from .paths import find_descriptor

DEFAULT_COMMON_FOLDER = "common"
DEFAULT_NPM_TOOL = "npm"

YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class ProjectConfig:
    """One entry of the descriptor's ``projects`` array."""
    package_name: str
    project_folder: str


@dataclass(frozen=True)
class WorkspaceConfig:
    """Validated workspace descriptor."""
    root: Path
    projects: tuple[ProjectConfig, ...] = field(default_factory=tuple)
    common_folder: str = DEFAULT_COMMON_FOLDER
    npm_tool: str = DEFAULT_NPM_TOOL

    @property
    def common_path(self) -> Path:
        return self.root / self.common_folder

    def project_path(self, project: ProjectConfig) -> Path:
        return self.root / project.project_folder


def preprocess_jsonish(text: str) -> str:
    """
    Preprocess JSON-ish text into strict JSON.

    ``//`` comments and trailing commas before ``]`` or ``}`` are replaced with
    spaces so line/column positions in error messages still match the input.
    String literals (including escaped quotes) are left untouched.

    Args:
        text: JSON-ish text with optional // comments and trailing commas

    Returns:
        Strict JSON text ready for json.loads()
    """
    out = list(text)
    n = len(text)
    i = 0
    in_string = False

    while i < n:
        char = text[i]

        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            i += 1
        elif char == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                out[i] = " "
                i += 1
        elif char == ",":
            if _next_significant(text, i + 1) in ("]", "}"):
                out[i] = " "
            i += 1
        else:
            i += 1

    return "".join(out)


def _next_significant(text: str, start: int) -> str | None:
    """Return the next character that is neither whitespace nor inside a comment."""
    j = start
    n = len(text)
    while j < n:
        if text[j] in " \t\r\n":
            j += 1
        elif text.startswith("//", j):
            while j < n and text[j] != "\n":
                j += 1
        else:
            return text[j]
    return None


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    """Format a JSON syntax error with line, caret, and context."""
    lines = original_text.split("\n")
    parts = [
        f"Descriptor syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]
    if 1 <= error.lineno <= len(lines):
        parts.append(lines[error.lineno - 1])
        parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(parts)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"Descriptor not found: {path}")
    except PermissionError:
        raise ConfigurationError(f"Permission denied reading descriptor: {path}")
    except UnicodeDecodeError:
        raise ConfigurationError(f"Descriptor is not valid UTF-8: {path}")
    except OSError as e:
        raise ConfigurationError(f"Error reading descriptor {path}: {e}")


def parse_jsonish(text: str) -> dict:
    """Parse JSON-ish text into a dict.

    Raises:
        ConfigurationError: On syntax errors or if the top level is not an object.
    """
    try:
        result = json.loads(preprocess_jsonish(text))
    except json.JSONDecodeError as e:
        raise ConfigurationError(_format_syntax_error(text, e)) from e

    if not isinstance(result, dict):
        raise ConfigurationError(
            f"Descriptor must be a JSON object, got {type(result).__name__}"
        )
    return result


def load_descriptor(path: Path) -> dict:
    """Load a descriptor file (JSON-ish or YAML) into a raw dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    text = _read_text(path)

    if path.suffix.lower() not in YAML_SUFFIXES:
        return parse_jsonish(text)

    try:
        result = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Descriptor syntax error in {path}: {e}") from e
    if not isinstance(result, dict):
        raise ConfigurationError(
            f"Descriptor must be a mapping, got {type(result).__name__}"
        )
    return result


def _require_str_field(data: dict, key: str, entity: str) -> str:
    if key not in data:
        raise ConfigurationError(f"{entity}.{key} is required")
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(
            format_field_error(entity, key, "must be a non-empty string")
        )
    return value


def _optional_str_field(data: dict, key: str, entity: str, default: str) -> str:
    if data.get(key) is None:
        return default
    return _require_str_field(data, key, entity)


def validate_descriptor(data: dict, root: Path) -> WorkspaceConfig:
    """Validate a raw descriptor dict and convert it to a WorkspaceConfig.

    Args:
        data: Raw dict from load_descriptor()
        root: Folder the descriptor lives in; project folders are relative to it

    Raises:
        ConfigurationError: If validation fails, with a field path in the message
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Descriptor must be an object, got {type(data).__name__}"
        )
    if "projects" not in data:
        raise ConfigurationError("Missing required field: projects")

    projects_data = data["projects"]
    if not isinstance(projects_data, list):
        raise ConfigurationError(
            f"projects must be a list, got {type(projects_data).__name__}"
        )

    projects = []
    for i, entry in enumerate(projects_data):
        entity = f"projects[{i}]"
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"{entity} must be an object, got {type(entry).__name__}"
            )
        projects.append(
            ProjectConfig(
                package_name=_require_str_field(entry, "packageName", entity),
                project_folder=_require_str_field(entry, "projectFolder", entity),
            )
        )

    return WorkspaceConfig(
        root=root,
        projects=tuple(projects),
        common_folder=_optional_str_field(
            data, "commonFolder", "descriptor", DEFAULT_COMMON_FOLDER
        ),
        npm_tool=_optional_str_field(data, "npmTool", "descriptor", DEFAULT_NPM_TOOL),
    )


def load_workspace_config(path: Path | None = None) -> WorkspaceConfig:
    """Locate, load and validate the workspace descriptor.

    Args:
        path: Explicit descriptor path; discovered with find_descriptor() if None

    Raises:
        ConfigurationError: If no descriptor is found or it is invalid
    """
    if path is None:
        path = find_descriptor()
        if path is None:
            raise ConfigurationError(
                "No monoprep.json found in the current folder or any parent folder"
            )

    data = load_descriptor(path)
    return validate_descriptor(data, path.resolve().parent)


__all__ = [
    "ProjectConfig",
    "WorkspaceConfig",
    "preprocess_jsonish",
    "parse_jsonish",
    "load_descriptor",
    "validate_descriptor",
    "load_workspace_config",
]
