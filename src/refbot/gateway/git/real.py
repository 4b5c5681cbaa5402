"""Production implementation of the Git gateway using subprocess."""

import logging
import subprocess
from pathlib import Path

from refbot.gateway.git.abc import Git
from refbot.gateway.git.types import PushError, PushResult
from refbot.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context

logger = logging.getLogger(__name__)

# Environment variable the inline credential helper reads the token from
TOKEN_ENV_VAR = "REFBOT_GIT_TOKEN"

# Shell helper answering git's credential "get" request with token:<empty>.
_CREDENTIAL_HELPER = f'!f() {{ echo "username=${TOKEN_ENV_VAR}"; echo "password="; }}; f'

# Lowercased stderr fragments git and common hosts emit when a credential is refused
_AUTH_FAILURE_MARKERS = (
    "authentication failed",
    "could not read username",
    "could not read password",
    "invalid username or password",
    "invalid credentials",
    "bad credentials",
    "the requested url returned error: 401",
    "the requested url returned error: 403",
    "terminal prompts disabled",
)


def is_auth_failure(stderr: str) -> bool:
    """Check whether git's stderr describes a rejected or missing credential."""
    lowered = stderr.lower()
    return any(marker in lowered for marker in _AUTH_FAILURE_MARKERS)


class RealGit(Git):
    """Production implementation of workspace git operations.

    All operations execute actual git commands via subprocess. Network
    operations run with terminal prompts disabled so a missing credential
    fails instead of blocking on stdin.
    """

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def clone(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        run_subprocess_with_context(
            cmd=["git", "clone", url, str(destination)],
            operation_context=f"clone '{url}' into '{destination}'",
            cwd=destination.parent,
            env=copied_env_for_git_subprocess(),
        )

    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "remote", "add", name, url],
            operation_context=f"add remote '{name}' -> '{url}'",
            cwd=repo_root,
        )

    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "fetch", remote],
            operation_context=f"fetch from remote '{remote}'",
            cwd=repo_root,
            env=copied_env_for_git_subprocess(),
        )

    def stash_apply(self, repo_root: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "stash", "apply"],
            operation_context="apply most recent stash",
            cwd=repo_root,
        )

    def checkout_new_tracking_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "checkout", "-b", branch, "--track", start_point],
            operation_context=f"create branch '{branch}' tracking '{start_point}'",
            cwd=repo_root,
        )

    def pull_ff_only(self, repo_root: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "pull", "--ff-only"],
            operation_context="pull current branch",
            cwd=repo_root,
            env=copied_env_for_git_subprocess(),
        )

    def checkout_branch(self, repo_root: Path, branch: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=repo_root,
        )

    def add_all(self, repo_root: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "add", "-A"],
            operation_context="stage all changes",
            cwd=repo_root,
        )

    def commit(self, repo_root: Path, message: str, *, author_name: str, author_email: str) -> None:
        # -c sets both author and committer identity for this invocation only
        run_subprocess_with_context(
            cmd=[
                "git",
                "-c",
                f"user.name={author_name}",
                "-c",
                f"user.email={author_email}",
                "commit",
                "--allow-empty",
                "-m",
                message,
            ],
            operation_context="create commit",
            cwd=repo_root,
        )

    def push_current_branch(
        self, repo_root: Path, remote: str, *, token: str
    ) -> PushResult | PushError:
        branch = self.get_current_branch(repo_root)
        if branch is None:
            return PushError(
                message=f"Cannot push from '{repo_root}': no branch is checked out",
                auth_rejected=False,
            )

        env = copied_env_for_git_subprocess()
        env[TOKEN_ENV_VAR] = token

        # Reset inherited helpers first so only the bot token is offered
        result = run_subprocess_with_context(
            cmd=[
                "git",
                "-c",
                "credential.helper=",
                "-c",
                f"credential.helper={_CREDENTIAL_HELPER}",
                "push",
                remote,
                f"HEAD:refs/heads/{branch}",
            ],
            operation_context=f"push branch '{branch}' to remote '{remote}'",
            cwd=repo_root,
            env=env,
            check=False,
        )
        if result.returncode != 0:
            stderr = result.stderr.strip()
            return PushError(
                message=stderr or f"git push exited with code {result.returncode}",
                auth_rejected=is_auth_failure(stderr),
            )
        return PushResult(remote=remote, branch=branch)

    # ============================================================================
    # Query Operations
    # ============================================================================

    def is_repository(self, path: Path) -> bool:
        if not path.is_dir():
            return False
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=path,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return False
        return Path(result.stdout.strip()).resolve() == path.resolve()

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0

    def get_current_branch(self, repo_root: Path) -> str | None:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        branch = result.stdout.strip()
        if branch == "HEAD":
            return None

        return branch
