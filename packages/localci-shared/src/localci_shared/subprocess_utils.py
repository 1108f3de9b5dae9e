"""Subprocess helpers with consistent error reporting."""

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    input: str | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a subprocess, raising a RuntimeError that explains what was attempted.

    Args:
        cmd: Command and arguments to execute
        operation_context: Description of the operation, e.g. "build sandbox image"
        cwd: Working directory for the command
        input: Text passed to the command's stdin
        env: Full environment for the command (defaults to the current one)

    Returns:
        CompletedProcess with captured text output

    Raises:
        RuntimeError: If the executable is missing or the command exits nonzero
    """
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            input=input,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: {cmd[0]} is not installed") from e

    if result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        message = f"Failed to {operation_context} (exit code {result.returncode})"
        if stderr:
            message += f"\n{stderr}"
        raise RuntimeError(message)
    return result
