"""Consolidation run: reset, write manifests, install, lock."""

import logging
import time
from pathlib import PurePosixPath

import click

from monoprep.errors import ExternalToolFailure
from monoprep.paths import MANIFEST_FILENAME
from monoprep.registry import Registry

from .generation import get_temp_manifest_path, plan_consolidation
from .models import ConsolidationPlan, ResetMode, RunResult
from .orchestration import Installer
from .workspace import Workspace

_logging = logging.getLogger(__name__)


def apply_plan(
    plan: ConsolidationPlan, workspace: Workspace, installer: Installer
) -> RunResult:
    """Execute a plan. Any failure propagates and aborts the remaining steps."""
    start = time.perf_counter()
    result = RunResult(plan=plan)

    if plan.reset_mode == ResetMode.FAST:
        click.echo("Deleting installed temp projects (fast reset)...")
    else:
        click.echo("Deleting previous installation (full reset)...")
    for path in workspace.reset(plan.reset_mode):
        _logging.debug(f"Removed {path}")

    click.echo("Creating temp projects...")
    for temp in plan.temp_projects:
        location = workspace.write_manifest(
            get_temp_manifest_path(temp.manifest.name), temp.manifest.to_dict()
        )
        result.written.append(str(location))

    click.echo(f"Writing {MANIFEST_FILENAME}")
    aggregate_location = workspace.write_manifest(
        PurePosixPath(MANIFEST_FILENAME), plan.aggregate.to_dict()
    )
    result.written.append(str(aggregate_location))

    click.secho('\nRunning "npm install"...', bold=True)
    result.install_status = installer.run_install(aggregate_location)
    if result.install_status != 0:
        raise ExternalToolFailure("npm install", result.install_status)
    click.echo('"npm install" completed\n')

    if plan.runs_lock:
        click.secho('Running "npm shrinkwrap"...', bold=True)
        result.lock_status = installer.run_lock(aggregate_location)
        if result.lock_status != 0:
            raise ExternalToolFailure("npm shrinkwrap", result.lock_status)
        click.echo('"npm shrinkwrap" completed\n')
    else:
        click.secho('(Skipping "npm shrinkwrap")\n', bold=True)

    result.elapsed = time.perf_counter() - start
    return result


def consolidate(
    registry: Registry,
    workspace: Workspace,
    installer: Installer,
    fast: bool = False,
) -> RunResult:
    """Plan and apply a consolidation run.

    The whole plan is computed before anything on disk is touched, so
    configuration and classification errors never leave partial state behind.
    """
    plan = plan_consolidation(registry, fast=fast)
    _logging.debug(
        f"Planned {len(plan.temp_projects)} temp projects ({plan.reset_mode.value} reset)"
    )
    return apply_plan(plan, workspace, installer)


__all__ = [
    "apply_plan",
    "consolidate",
]
