"""Data models for the consolidation engine."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from monoprep.registry import AGGREGATE_NAME

PLACEHOLDER_VERSION = "0.0.0"
AGGREGATE_DESCRIPTION = "Temporary file generated by monoprep"


class DependencyKind(Enum):
    LOCAL = "local"
    EXTERNAL = "external"


class ResetMode(Enum):
    FULL = "full"
    FAST = "fast"


@dataclass(frozen=True)
class DependencyPair:
    package_name: str
    version_range: str


@dataclass(frozen=True)
class ClassifiedDependency:
    package_name: str
    version_range: str
    kind: DependencyKind

    @property
    def is_local(self) -> bool:
        return self.kind == DependencyKind.LOCAL


@dataclass(frozen=True)
class Classification:
    """Effective dependency list of one project, in first-seen order."""
    project: str
    dependencies: tuple[ClassifiedDependency, ...] = ()
    passthrough_optional: dict[str, Any] | None = None

    @property
    def local(self) -> list[ClassifiedDependency]:
        return [d for d in self.dependencies if d.is_local]

    @property
    def external(self) -> list[ClassifiedDependency]:
        return [d for d in self.dependencies if not d.is_local]


@dataclass
class SyntheticManifest:
    name: str
    dependencies: dict[str, str] = field(default_factory=dict)
    optional_dependencies: dict[str, Any] | None = None
    version: str = PLACEHOLDER_VERSION
    private: bool = True

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "private": self.private,
            "dependencies": dict(self.dependencies),
        }
        if self.optional_dependencies is not None:
            record["optionalDependencies"] = dict(self.optional_dependencies)
        return record


@dataclass
class AggregateManifest:
    dependencies: dict[str, str] = field(default_factory=dict)
    name: str = AGGREGATE_NAME
    version: str = PLACEHOLDER_VERSION
    description: str = AGGREGATE_DESCRIPTION
    private: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependencies": dict(self.dependencies),
            "description": self.description,
            "name": self.name,
            "private": self.private,
            "version": self.version,
        }


@dataclass(frozen=True)
class TempProject:
    """A synthetic project ready to be written below ``temp_modules``.

    ``folder`` is relative to the common folder.
    """
    project: str
    folder: PurePosixPath
    manifest: SyntheticManifest
    classification: Classification


@dataclass
class ConsolidationPlan:
    """Output of the pure phase: everything the effectful phase writes."""
    temp_projects: list[TempProject]
    aggregate: AggregateManifest
    reset_mode: ResetMode

    @property
    def runs_lock(self) -> bool:
        return self.reset_mode == ResetMode.FULL


@dataclass
class RunResult:
    plan: ConsolidationPlan
    written: list[str] = field(default_factory=list)
    install_status: int | None = None
    lock_status: int | None = None
    elapsed: float = 0.0


__all__ = [
    "PLACEHOLDER_VERSION",
    "AGGREGATE_NAME",
    "AGGREGATE_DESCRIPTION",
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
]
