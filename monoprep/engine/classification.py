"""Dependency classification: merge a project's declarations and tag each one."""

import logging
from typing import Any

from monoprep.errors import ClassificationError
from monoprep.registry import Project, Registry

from .models import (
    Classification,
    ClassifiedDependency,
    DependencyKind,
    DependencyPair,
)

_logging = logging.getLogger(__name__)


def _validate_version_range(project: str, package_name: Any, version_range: Any) -> None:
    if not isinstance(package_name, str) or not package_name.strip():
        raise ClassificationError(
            f"Project '{project}' declares a dependency with an invalid name: "
            f"{package_name!r}",
            project=project,
        )
    if not isinstance(version_range, str):
        raise ClassificationError(
            f"Project '{project}' dependency '{package_name}' has a version range "
            f"of type {type(version_range).__name__}, expected a string",
            project=project,
            package=package_name,
        )
    if not version_range.strip():
        raise ClassificationError(
            f"Project '{project}' dependency '{package_name}' has an empty version range",
            project=project,
            package=package_name,
        )


def _category_items(project: Project, category: str, value: Any) -> list[tuple[Any, Any]]:
    if value is None:
        return []
    if not hasattr(value, "items"):
        raise ClassificationError(
            f"Project '{project.package_name}' field '{category}' must be an object, "
            f"got {type(value).__name__}",
            project=project.package_name,
        )
    return list(value.items())


def collect_pairs(project: Project) -> list[DependencyPair]:
    """Merge devDependencies and dependencies into one ordered pair list.

    devDependencies are collected first. When a package appears in both
    categories the dependencies entry replaces the version range, but the
    package keeps the position where it was first seen.

    Raises:
        ClassificationError: If a category is not an object or a version range
            is not a non-empty string
    """
    manifest = project.manifest
    merged: dict[str, str] = {}

    for category, value in (
        ("devDependencies", manifest.dev_dependencies),
        ("dependencies", manifest.dependencies),
    ):
        for package_name, version_range in _category_items(project, category, value):
            _validate_version_range(project.package_name, package_name, version_range)
            merged[package_name] = version_range

    return [DependencyPair(name, version) for name, version in merged.items()]


def classify_package(package_name: str, project: Project, registry: Registry) -> DependencyKind:
    """Local when some other project in the registry has this package name."""
    owner = registry.get_project_by_name(package_name)
    if owner is not None and owner.package_name != project.package_name:
        return DependencyKind.LOCAL
    return DependencyKind.EXTERNAL


def classify(project: Project, registry: Registry) -> Classification:
    """Compute the effective, tagged dependency list of one project.

    optionalDependencies are returned untouched in ``passthrough_optional``.
    """
    dependencies = tuple(
        ClassifiedDependency(
            package_name=pair.package_name,
            version_range=pair.version_range,
            kind=classify_package(pair.package_name, project, registry),
        )
        for pair in collect_pairs(project)
    )

    optional = _category_items(
        project, "optionalDependencies", project.manifest.optional_dependencies
    )

    classification = Classification(
        project=project.package_name,
        dependencies=dependencies,
        passthrough_optional=(
            dict(optional)
            if project.manifest.optional_dependencies is not None
            else None
        ),
    )
    _logging.debug(
        f"Classified {project.package_name}: {len(classification.external)} external, "
        f"{len(classification.local)} local, {len(optional)} optional"
    )
    return classification


__all__ = [
    "collect_pairs",
    "classify_package",
    "classify",
]
