"""Workspace reset and manifest persistence.

The engine only talks to the :class:`Workspace` protocol. FileSystemWorkspace
is the production implementation operating on the common folder.
"""

import logging
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from monoprep.errors import IOFailure
from monoprep.paths import (
    get_lock_path,
    get_node_modules_path,
    get_temp_modules_path,
)
from monoprep.registry import is_temp_project_name

from .generation import serialize_manifest
from .models import ResetMode

_logging = logging.getLogger(__name__)


class Workspace(Protocol):
    def reset(self, mode: ResetMode) -> list[Path]:
        """Clear prior installation state; return the removed paths."""
        ...

    def write_manifest(self, relative_path: PurePosixPath, data: dict[str, Any]) -> Path:
        """Persist a manifest below the common folder; return its location."""
        ...


def _remove_path(path: Path) -> None:
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise IOFailure(f"Failed to delete ({e.strerror or e})", path) from e


class FileSystemWorkspace:
    """Reset and write below ``common_folder``."""

    def __init__(self, common_folder: Path):
        self.common_folder = common_folder

    @property
    def node_modules_path(self) -> Path:
        return get_node_modules_path(self.common_folder)

    @property
    def temp_modules_path(self) -> Path:
        return get_temp_modules_path(self.common_folder)

    @property
    def lock_path(self) -> Path:
        return get_lock_path(self.common_folder)

    def installed_temp_projects(self) -> list[Path]:
        """Entries of node_modules that were installed from temp projects."""
        if not self.node_modules_path.is_dir():
            return []
        return [
            entry
            for entry in sorted(self.node_modules_path.iterdir())
            if is_temp_project_name(entry.name)
        ]

    def reset(self, mode: ResetMode) -> list[Path]:
        removed = []

        if mode == ResetMode.FAST:
            # Keep node_modules; only drop what came from the previous temp projects.
            for entry in self.installed_temp_projects():
                _logging.info(f"Deleting {entry}")
                _remove_path(entry)
                removed.append(entry)
        elif self.node_modules_path.exists():
            _logging.info(f"Deleting {self.node_modules_path}")
            _remove_path(self.node_modules_path)
            removed.append(self.node_modules_path)

        for path in (self.temp_modules_path, self.lock_path):
            if path.exists() or path.is_symlink():
                _logging.info(f"Deleting {path}")
                _remove_path(path)
                removed.append(path)

        try:
            self.temp_modules_path.mkdir(parents=True)
        except OSError as e:
            raise IOFailure(
                f"Failed to create folder ({e.strerror or e})", self.temp_modules_path
            ) from e

        return removed

    def write_manifest(self, relative_path: PurePosixPath, data: dict[str, Any]) -> Path:
        target = self.common_folder / Path(relative_path)
        temp_path = target.with_suffix(f".tmp.{uuid.uuid4().hex[:8]}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(serialize_manifest(data))
            temp_path.replace(target)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise IOFailure(f"Failed to write manifest ({e.strerror or e})", target) from e

        _logging.debug(f"Wrote {target}")
        return target


__all__ = [
    "Workspace",
    "FileSystemWorkspace",
]
