"""Install orchestration: invoking the external package manager."""

import shlex
from pathlib import Path
from typing import Protocol

from monoprep.execution import run_command


class Installer(Protocol):
    def run_install(self, manifest_location: Path) -> int:
        ...

    def run_lock(self, manifest_location: Path) -> int:
        ...


class NpmInstaller:
    """Run ``npm install`` / ``npm shrinkwrap`` next to the aggregate manifest."""

    def __init__(self, npm_tool: str = "npm"):
        self.npm_tool = npm_tool

    def command(self, verb: str) -> list[str]:
        return [*shlex.split(self.npm_tool), verb]

    def run_install(self, manifest_location: Path) -> int:
        return run_command(self.command("install"), cwd=manifest_location.parent)

    def run_lock(self, manifest_location: Path) -> int:
        return run_command(self.command("shrinkwrap"), cwd=manifest_location.parent)


__all__ = [
    "Installer",
    "NpmInstaller",
]
