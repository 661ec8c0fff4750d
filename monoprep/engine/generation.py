"""Temp project and aggregate manifest generation (the pure phase)."""

import json
from pathlib import PurePosixPath
from typing import Any, Iterable

from monoprep.paths import MANIFEST_FILENAME, TEMP_MODULES_FOLDER
from monoprep.registry import Project, Registry

from .classification import classify
from .models import (
    AggregateManifest,
    Classification,
    ConsolidationPlan,
    ResetMode,
    SyntheticManifest,
    TempProject,
)


def get_temp_project_folder(temp_project_name: str) -> PurePosixPath:
    """Folder of a temp project, relative to the common folder."""
    return PurePosixPath(TEMP_MODULES_FOLDER) / temp_project_name


def get_temp_manifest_path(temp_project_name: str) -> PurePosixPath:
    return get_temp_project_folder(temp_project_name) / MANIFEST_FILENAME


def build_temp_manifest(project: Project, classification: Classification) -> TempProject:
    """Build the synthetic manifest for one project.

    External dependencies become regular dependencies. Local ones become
    optional dependencies, since a sibling project may not be published yet
    and gets linked in from the workspace instead. The source project's own
    optionalDependencies are copied first; a local dependency with the same
    name replaces that entry.
    """
    manifest = SyntheticManifest(name=project.temp_project_name)

    if classification.passthrough_optional is not None:
        manifest.optional_dependencies = dict(classification.passthrough_optional)

    for dep in classification.dependencies:
        if dep.is_local:
            if manifest.optional_dependencies is None:
                manifest.optional_dependencies = {}
            manifest.optional_dependencies[dep.package_name] = dep.version_range
        else:
            manifest.dependencies[dep.package_name] = dep.version_range

    return TempProject(
        project=project.package_name,
        folder=get_temp_project_folder(project.temp_project_name),
        manifest=manifest,
        classification=classification,
    )


def build_aggregate_manifest(temp_project_names: Iterable[str]) -> AggregateManifest:
    """Build the common manifest that pulls in every temp project.

    Entries keep the order of ``temp_project_names``.
    """
    aggregate = AggregateManifest()
    for name in temp_project_names:
        aggregate.dependencies[name] = f"file:./{get_temp_project_folder(name)}"
    return aggregate


def select_reset_mode(fast: bool) -> ResetMode:
    return ResetMode.FAST if fast else ResetMode.FULL


def plan_consolidation(registry: Registry, fast: bool = False) -> ConsolidationPlan:
    """Classify every project and build all manifests, without any I/O."""
    temp_projects = [
        build_temp_manifest(project, classify(project, registry))
        for project in registry
    ]
    aggregate = build_aggregate_manifest(
        temp.manifest.name for temp in temp_projects
    )
    return ConsolidationPlan(
        temp_projects=temp_projects,
        aggregate=aggregate,
        reset_mode=select_reset_mode(fast),
    )


def serialize_manifest(data: dict[str, Any]) -> str:
    """Render a manifest as two-space indented JSON with a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_plan(plan: ConsolidationPlan) -> str:
    lines = [f"Consolidation Plan ({plan.reset_mode.value} reset)", ""]

    lines.append("Temp projects:")
    for i, temp in enumerate(plan.temp_projects, 1):
        classification = temp.classification
        lines.append(f"  {i}. {temp.project} -> {temp.folder}")
        lines.append(
            f"     {len(classification.external)} external, "
            f"{len(classification.local)} local"
        )
        for dep in classification.local:
            lines.append(f"     • {dep.package_name} {dep.version_range} (local)")
    lines.append("")

    lines.append("Steps:")
    lines.append(f"  • write {MANIFEST_FILENAME} ({len(plan.aggregate.dependencies)} temp projects)")
    lines.append("  • install")
    if plan.runs_lock:
        lines.append("  • shrinkwrap")
    else:
        lines.append("  • shrinkwrap (skipped)")

    return "\n".join(lines)


__all__ = [
    "get_temp_project_folder",
    "get_temp_manifest_path",
    "build_temp_manifest",
    "build_aggregate_manifest",
    "select_reset_mode",
    "plan_consolidation",
    "serialize_manifest",
    "render_plan",
]
