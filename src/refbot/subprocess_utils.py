"""Subprocess helpers that attach operation context to failures.

All git invocations in refbot go through run_subprocess_with_context() so that
a failing command surfaces as a RuntimeError describing what refbot was trying
to do, the exact command, the exit code, and git's stderr.
"""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    check: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command, converting failures into RuntimeError with context.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of the operation,
            used as the prefix of the error message (e.g. "clone 'url'")
        cwd: Working directory for the command
        check: If True, raise RuntimeError on non-zero exit. If False, return
            the CompletedProcess and let the caller inspect returncode.
        env: Environment for the child process (defaults to inherited)

    Returns:
        CompletedProcess with captured text stdout/stderr

    Raises:
        RuntimeError: If the command exits non-zero (when check=True), or cannot
            be started
    """
    logger.debug("Running %s (cwd=%s): %s", operation_context, cwd, " ".join(cmd))
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: command not found: {cmd[0]}") from e

    if check and result.returncode != 0:
        raise RuntimeError(_format_failure(operation_context, cmd, result))

    return result


def _format_failure(
    operation_context: str,
    cmd: Sequence[str],
    result: subprocess.CompletedProcess[str],
) -> str:
    lines = [
        f"Failed to {operation_context}",
        f"Command: {' '.join(cmd)}",
        f"Exit code: {result.returncode}",
    ]
    stderr = result.stderr.strip()
    if stderr:
        lines.append(f"stderr: {stderr}")
    return "\n".join(lines)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy of os.environ suitable for non-interactive git commands.

    Terminal credential prompts are disabled so that git fails fast instead of
    blocking on stdin when a remote asks for credentials.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    env.setdefault("GCM_INTERACTIVE", "never")
    return env
