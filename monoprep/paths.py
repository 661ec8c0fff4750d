"""Workspace path helpers for monoprep."""

import os
from pathlib import Path

DESCRIPTOR_NAMES = ("monoprep.json", "monoprep.yaml", "monoprep.yml")

TEMP_MODULES_FOLDER = "temp_modules"
NODE_MODULES_FOLDER = "node_modules"
MANIFEST_FILENAME = "package.json"
LOCK_FILENAME = "npm-shrinkwrap.json"


def find_descriptor(start: Path | None = None) -> Path | None:
    """Return path to the workspace descriptor, or None if there is none.

    Priority:
    1. MONOPREP_CONFIG environment variable (if set)
    2. The first monoprep.json / monoprep.yaml found in ``start`` (default:
       the current directory) or any of its parents
    """
    if "MONOPREP_CONFIG" in os.environ:
        return Path(os.environ["MONOPREP_CONFIG"])

    current = (start or Path.cwd()).resolve()
    for folder in (current, *current.parents):
        for name in DESCRIPTOR_NAMES:
            candidate = folder / name
            if candidate.is_file():
                return candidate
    return None


def get_temp_modules_path(common_folder: Path) -> Path:
    return common_folder / TEMP_MODULES_FOLDER


def get_node_modules_path(common_folder: Path) -> Path:
    return common_folder / NODE_MODULES_FOLDER


def get_lock_path(common_folder: Path) -> Path:
    return common_folder / LOCK_FILENAME
