"""Blocking command execution for the external package manager."""

import logging
import shlex
import subprocess
from pathlib import Path

from .errors import IOFailure

_logging = logging.getLogger(__name__)


def run_command(args: list[str], cwd: Path) -> int:
    """Run a command in ``cwd`` and return its exit status.

    The child inherits stdin/stdout/stderr so the package manager's own
    output streams straight to the console. No timeout is applied.

    Raises:
        IOFailure: If ``cwd`` is not an existing folder
    """
    if not cwd.is_dir():
        raise IOFailure("Working folder not found", cwd)
    command = shlex.join(args)
    _logging.debug(f"Running command: {command} (cwd={cwd})")
    try:
        completed = subprocess.run(args, cwd=cwd, check=False)
    except FileNotFoundError:
        _logging.error(f"Command not found: {args[0]}")
        return 127
    except OSError as e:
        _logging.error(f"Command execution failed: {type(e).__name__}: {e} | Command: {command}")
        return 126
    _logging.debug(f"Command exited with {completed.returncode}: {command}")
    return completed.returncode
