"""Project registry: an immutable snapshot of every project in the workspace."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .config import WorkspaceConfig
from .errors import ConfigurationError
from .paths import MANIFEST_FILENAME

TEMP_PROJECT_PREFIX = "monoprep-"
AGGREGATE_NAME = TEMP_PROJECT_PREFIX + "common"

_logging = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    # Non-dict values are kept so the classifier can report them.
    if isinstance(value, dict):
        return MappingProxyType(dict(value))
    return value


def get_unscoped_name(package_name: str) -> str:
    """Strip the ``@scope/`` part of a package name.

    >>> get_unscoped_name("@acme/widgets")
    'widgets'
    >>> get_unscoped_name("widgets")
    'widgets'
    """
    if package_name.startswith("@") and "/" in package_name:
        return package_name.split("/", 1)[1]
    return package_name


def get_temp_project_name(package_name: str) -> str:
    """Derive the synthetic identifier for a project."""
    return TEMP_PROJECT_PREFIX + get_unscoped_name(package_name)


def is_temp_project_name(name: str) -> bool:
    return name.startswith(TEMP_PROJECT_PREFIX)


@dataclass(frozen=True)
class Manifest:
    """The dependency-related fields of a project's package.json.

    Category values are kept as read; ``None`` means the category is absent.
    """
    name: str
    dependencies: Any = None
    dev_dependencies: Any = None
    optional_dependencies: Any = None

    @classmethod
    def from_package_json(cls, data: dict) -> "Manifest":
        return cls(
            name=data.get("name", ""),
            dependencies=_freeze(data.get("dependencies")),
            dev_dependencies=_freeze(data.get("devDependencies")),
            optional_dependencies=_freeze(data.get("optionalDependencies")),
        )


@dataclass(frozen=True)
class Project:
    package_name: str
    manifest: Manifest
    project_folder: Path | None = None
    temp_project_name: str = ""

    def __post_init__(self):
        if not self.temp_project_name:
            object.__setattr__(
                self, "temp_project_name", get_temp_project_name(self.package_name)
            )


@dataclass(frozen=True)
class Registry:
    """Ordered, validated collection of projects.

    Construction fails with ConfigurationError when the registry is empty or
    when two projects share a package name or a synthetic identifier, or when
    a synthetic identifier equals the common package.json name.
    """
    projects: tuple[Project, ...]
    _by_name: Mapping[str, Project] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        projects = tuple(self.projects)
        object.__setattr__(self, "projects", projects)

        if not projects:
            raise ConfigurationError("The workspace does not define any projects")

        by_name: dict[str, Project] = {}
        by_temp_name: dict[str, Project] = {}
        for project in projects:
            if project.package_name in by_name:
                raise ConfigurationError(
                    f"Project '{project.package_name}' is declared more than once"
                )
            if project.temp_project_name == AGGREGATE_NAME:
                raise ConfigurationError(
                    f"Project '{project.package_name}' maps to the temp project name "
                    f"'{AGGREGATE_NAME}', which is reserved for the common package.json"
                )
            other = by_temp_name.get(project.temp_project_name)
            if other is not None:
                raise ConfigurationError(
                    f"Projects '{other.package_name}' and '{project.package_name}' "
                    f"both map to the temp project name '{project.temp_project_name}'"
                )
            by_name[project.package_name] = project
            by_temp_name[project.temp_project_name] = project

        object.__setattr__(self, "_by_name", MappingProxyType(by_name))

    def __iter__(self) -> Iterator[Project]:
        return iter(self.projects)

    def __len__(self) -> int:
        return len(self.projects)

    def get_project_by_name(self, package_name: str) -> Project | None:
        return self._by_name.get(package_name)


def read_package_json(path: Path) -> dict:
    """Read a project's package.json.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"package.json not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Error reading {path}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {path} at line {e.lineno}, col {e.colno}: {e.msg}"
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return data


def load_registry(config: WorkspaceConfig) -> Registry:
    """Build the registry snapshot from a validated workspace descriptor."""
    projects = []
    for entry in config.projects:
        folder = config.project_path(entry)
        package_json_path = folder / MANIFEST_FILENAME
        _logging.debug(f"Loading {package_json_path}")

        data = read_package_json(package_json_path)
        manifest = Manifest.from_package_json(data)
        if manifest.name != entry.package_name:
            raise ConfigurationError(
                f"The package name '{entry.package_name}' does not match the name "
                f"'{manifest.name}' in {package_json_path}"
            )
        projects.append(
            Project(
                package_name=entry.package_name,
                manifest=manifest,
                project_folder=folder,
            )
        )

    return Registry(tuple(projects))


__all__ = [
    "TEMP_PROJECT_PREFIX",
    "AGGREGATE_NAME",
    "Manifest",
    "Project",
    "Registry",
    "get_unscoped_name",
    "get_temp_project_name",
    "is_temp_project_name",
    "read_package_json",
    "load_registry",
]
