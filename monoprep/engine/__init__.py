"""Consolidation engine: classify, generate, reset, install."""

from .classification import classify, classify_package, collect_pairs
from .consolidation import apply_plan, consolidate
from .generation import (
    build_aggregate_manifest,
    build_temp_manifest,
    get_temp_manifest_path,
    get_temp_project_folder,
    plan_consolidation,
    render_plan,
    select_reset_mode,
    serialize_manifest,
)
from .models import (
    AggregateManifest,
    Classification,
    ClassifiedDependency,
    ConsolidationPlan,
    DependencyKind,
    DependencyPair,
    ResetMode,
    RunResult,
    SyntheticManifest,
    TempProject,
)
from .orchestration import Installer, NpmInstaller
from .workspace import FileSystemWorkspace, Workspace

__all__ = [
    "DependencyKind",
    "ResetMode",
    "DependencyPair",
    "ClassifiedDependency",
    "Classification",
    "SyntheticManifest",
    "AggregateManifest",
    "TempProject",
    "ConsolidationPlan",
    "RunResult",
    "collect_pairs",
    "classify_package",
    "classify",
    "get_temp_project_folder",
    "get_temp_manifest_path",
    "build_temp_manifest",
    "build_aggregate_manifest",
    "select_reset_mode",
    "plan_consolidation",
    "serialize_manifest",
    "render_plan",
    "Workspace",
    "FileSystemWorkspace",
    "Installer",
    "NpmInstaller",
    "apply_plan",
    "consolidate",
]
