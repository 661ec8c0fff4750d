"""Pytest fixtures and utilities for monoprep tests."""

import json
import tempfile
from pathlib import Path, PurePosixPath
from typing import Any, Generator

import pytest

from monoprep.engine import ResetMode
from monoprep.registry import Manifest, Project, Registry


def make_project(
    name: str,
    dependencies: Any = None,
    dev_dependencies: Any = None,
    optional_dependencies: Any = None,
) -> Project:
    """Build a Project the way load_registry() would from a package.json."""
    data: dict[str, Any] = {"name": name}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if dev_dependencies is not None:
        data["devDependencies"] = dev_dependencies
    if optional_dependencies is not None:
        data["optionalDependencies"] = optional_dependencies
    return Project(package_name=name, manifest=Manifest.from_package_json(data))


class RecordingWorkspace:
    """In-memory Workspace that records every call."""

    def __init__(self, fail_on: str | None = None):
        self.calls: list[tuple] = []
        self.files: dict[str, dict] = {}
        self.fail_on = fail_on

    def reset(self, mode: ResetMode) -> list[Path]:
        self.calls.append(("reset", mode))
        return []

    def write_manifest(self, relative_path: PurePosixPath, data: dict) -> Path:
        from monoprep.errors import IOFailure

        if self.fail_on == str(relative_path):
            raise IOFailure("Failed to write manifest", relative_path)
        self.calls.append(("write", str(relative_path)))
        self.files[str(relative_path)] = data
        return Path("/workspace/common") / relative_path


class RecordingInstaller:
    """In-memory Installer returning canned exit statuses."""

    def __init__(self, install_status: int = 0, lock_status: int = 0):
        self.calls: list[tuple[str, Path]] = []
        self.install_status = install_status
        self.lock_status = lock_status

    def run_install(self, manifest_location: Path) -> int:
        self.calls.append(("install", manifest_location))
        return self.install_status

    def run_lock(self, manifest_location: Path) -> int:
        self.calls.append(("lock", manifest_location))
        return self.lock_status


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_registry() -> Registry:
    """Two projects where app depends on the sibling library."""
    return Registry(
        (
            make_project("project-x", dependencies={"lodash": "^1.0.0"}),
            make_project(
                "project-y",
                dependencies={"project-x": "^1.0.0"},
                dev_dependencies={"mocha": "^10.0.0"},
            ),
        )
    )


@pytest.fixture
def workspace_root(temp_dir: Path) -> Path:
    """Write a small monorepo with a monoprep.json descriptor to disk."""
    projects = {
        "libs/widgets": {
            "name": "@acme/widgets",
            "version": "1.2.0",
            "dependencies": {"lodash": "^4.17.0"},
            "devDependencies": {"typescript": "~5.3.0"},
        },
        "apps/web": {
            "name": "web",
            "version": "0.1.0",
            "dependencies": {"@acme/widgets": "^1.2.0", "react": "^18.0.0"},
            "devDependencies": {"react": "^17.0.0"},
        },
    }
    for folder, package_json in projects.items():
        (temp_dir / folder).mkdir(parents=True)
        (temp_dir / folder / "package.json").write_text(json.dumps(package_json))

    (temp_dir / "monoprep.json").write_text(
        """{
  // projects in install order
  "projects": [
    { "packageName": "@acme/widgets", "projectFolder": "libs/widgets" },
    { "packageName": "web", "projectFolder": "apps/web" },
  ],
}
"""
    )
    return temp_dir


@pytest.fixture(autouse=True)
def _no_descriptor_env(monkeypatch):
    monkeypatch.delenv("MONOPREP_CONFIG", raising=False)
