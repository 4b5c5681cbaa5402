"""Git workspace lifecycle for refactoring tasks.

One workspace (a local checkout) exists per repository configuration, at
``<workspace_root>/<configuration_id>``. After init_workspace() it has two
remotes: ``origin`` (the bot's fork, writable) and ``upstream`` (the original
repository). Feature branches are created per task, and results are
committed and pushed to the fork with the bot's identity and token.

Operations are synchronous and assume callers serialize access per
configuration id. Each operation acquires the workspace, performs one logical
git step or a short sequence of them, and releases it on every exit path.
Git failures are logged with full detail and returned as typed
NonIdealState results; nothing is swallowed.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from refbot.config import RepositoryConfiguration
from refbot.gateway.git.abc import Git
from refbot.gateway.git.types import PushError
from refbot.workspace.types import (
    BranchAlreadyExists,
    BranchCreated,
    BranchSwitched,
    ChangesPushed,
    GitWorkflowError,
    InvalidToken,
    RemoteAdded,
    RemoteFetched,
    StashApplied,
    WorkspaceCloned,
    WorkspaceReady,
)

logger = logging.getLogger(__name__)

FORK_REMOTE = "origin"
UPSTREAM_REMOTE = "upstream"


class GitWorkspaceEngine:
    """Drives the clone / remote / branch / commit-push cycle of one workspace per task."""

    def __init__(self, git: Git, workspace_root: Path) -> None:
        """Create an engine.

        Args:
            git: Git gateway used for every operation
            workspace_root: Base directory holding one checkout per configuration id
        """
        self._git = git
        self._workspace_root = workspace_root

    def workspace_path(self, config: RepositoryConfiguration) -> Path:
        return self._workspace_root / config.configuration_id

    @contextmanager
    def _open_workspace(self, config: RepositoryConfiguration, operation: str) -> Iterator[Path]:
        """Acquire an existing workspace for the duration of one operation.

        Raises:
            RuntimeError: If the workspace directory is not a git checkout
        """
        repo_root = self.workspace_path(config)
        if not self._git.is_repository(repo_root):
            raise RuntimeError(
                f"Failed to {operation}: workspace '{repo_root}' is not a git repository"
            )
        logger.debug("Opened workspace %s for %s", repo_root, operation)
        try:
            yield repo_root
        finally:
            logger.debug("Released workspace %s after %s", repo_root, operation)

    # ============================================================================
    # Workspace setup
    # ============================================================================

    def clone_repository(self, config: RepositoryConfiguration) -> WorkspaceCloned | GitWorkflowError:
        """Clone the fork into the configuration's workspace directory."""
        destination = self.workspace_path(config)
        try:
            self._git.clone(config.fork_url, destination)
        except RuntimeError:
            logger.error("Clone of %s into %s failed", config.fork_url, destination, exc_info=True)
            return GitWorkflowError(
                operation="clone",
                target=config.fork_url,
                message=f"Failed to clone '{config.fork_url}'",
            )
        logger.info("Cloned %s into %s", config.fork_url, destination)
        return WorkspaceCloned(workspace=destination)

    def add_remote(self, config: RepositoryConfiguration) -> RemoteAdded | GitWorkflowError:
        """Add the upstream repository as the 'upstream' remote."""
        try:
            with self._open_workspace(config, "add remote") as repo_root:
                self._git.add_remote(repo_root, UPSTREAM_REMOTE, config.upstream_url)
        except RuntimeError:
            logger.error(
                "Adding remote %s -> %s failed", UPSTREAM_REMOTE, config.upstream_url, exc_info=True
            )
            return GitWorkflowError(
                operation="add-remote",
                target=config.upstream_url,
                message=f"Could not add '{config.upstream_url}' as remote '{UPSTREAM_REMOTE}'",
            )
        return RemoteAdded(name=UPSTREAM_REMOTE, url=config.upstream_url)

    def init_workspace(self, config: RepositoryConfiguration) -> WorkspaceReady | GitWorkflowError:
        """Clone the fork and wire the upstream remote.

        Stops at the first failing step and returns its error.
        """
        cloned = self.clone_repository(config)
        if isinstance(cloned, GitWorkflowError):
            return cloned

        remote = self.add_remote(config)
        if isinstance(remote, GitWorkflowError):
            return remote

        return WorkspaceReady(workspace=cloned.workspace)

    def fetch_remote(self, config: RepositoryConfiguration) -> RemoteFetched | GitWorkflowError:
        """Fetch all refs from 'upstream'."""
        try:
            with self._open_workspace(config, "fetch") as repo_root:
                self._git.fetch_remote(repo_root, UPSTREAM_REMOTE)
        except RuntimeError:
            logger.error("Fetching %s failed", UPSTREAM_REMOTE, exc_info=True)
            return GitWorkflowError(
                operation="fetch",
                target=UPSTREAM_REMOTE,
                message=f"Could not fetch data from '{UPSTREAM_REMOTE}'",
            )
        return RemoteFetched(remote=UPSTREAM_REMOTE)

    def stash_changes(self, config: RepositoryConfiguration) -> StashApplied | GitWorkflowError:
        """Apply the most recent stash entry onto the working tree."""
        try:
            with self._open_workspace(config, "apply stash") as repo_root:
                self._git.stash_apply(repo_root)
        except RuntimeError:
            logger.error("Applying stash in %s failed", config.configuration_id, exc_info=True)
            return GitWorkflowError(
                operation="stash-apply",
                target=str(self.workspace_path(config)),
                message="Failed to apply stashed changes",
            )
        return StashApplied()

    # ============================================================================
    # Branch lifecycle
    # ============================================================================

    def create_branch(
        self,
        config: RepositoryConfiguration,
        source_branch: str,
        new_branch: str,
        remote_name: str,
    ) -> BranchCreated | BranchAlreadyExists | GitWorkflowError:
        """Create and check out new_branch tracking <remote_name>/<source_branch>, then pull.

        An existing new_branch is reported as BranchAlreadyExists rather than a
        workflow error: it means the task was handled by an earlier run whose
        branch survived even though the bot's own record of it did not.
        """
        start_point = f"{remote_name}/{source_branch}"
        try:
            with self._open_workspace(config, f"create branch '{new_branch}'") as repo_root:
                if self._git.local_branch_exists(repo_root, new_branch):
                    logger.error("Branch %s already exists in %s", new_branch, repo_root)
                    return BranchAlreadyExists(
                        branch_name=new_branch,
                        message=(
                            f"Branch '{new_branch}' already exists: the issue was already "
                            "refactored in the past. The bot's records may have been reset "
                            "but not the fork itself."
                        ),
                    )
                self._git.checkout_new_tracking_branch(repo_root, new_branch, start_point)
                self._git.pull_ff_only(repo_root)
        except RuntimeError:
            logger.error("Creating branch %s from %s failed", new_branch, start_point, exc_info=True)
            return GitWorkflowError(
                operation="create-branch",
                target=new_branch,
                message=f"Branch with the name '{new_branch}' could not be created",
            )
        logger.info("Created branch %s tracking %s", new_branch, start_point)
        return BranchCreated(branch_name=new_branch, start_point=start_point)

    def switch_branch(
        self, config: RepositoryConfiguration, branch: str
    ) -> BranchSwitched | BranchCreated | BranchAlreadyExists | GitWorkflowError:
        """Check out an existing local branch.

        A branch that no longer exists locally is recreated from
        origin/<branch> via create_branch().
        """
        exists_locally = False
        try:
            with self._open_workspace(config, f"switch to branch '{branch}'") as repo_root:
                exists_locally = self._git.local_branch_exists(repo_root, branch)
                if exists_locally:
                    self._git.checkout_branch(repo_root, branch)
        except RuntimeError:
            logger.error("Switching to branch %s failed", branch, exc_info=True)
            return GitWorkflowError(
                operation="switch-branch",
                target=branch,
                message=f"Could not switch to the branch with the name '{branch}'",
            )

        if not exists_locally:
            logger.info("Branch %s missing locally, recreating from %s", branch, FORK_REMOTE)
            return self.create_branch(config, branch, branch, FORK_REMOTE)

        return BranchSwitched(branch_name=branch)

    # ============================================================================
    # Publishing
    # ============================================================================

    def push_changes(
        self, config: RepositoryConfiguration, commit_message: str
    ) -> ChangesPushed | InvalidToken | GitWorkflowError:
        """Stage everything, commit as the bot, and push the current branch to the fork."""
        try:
            with self._open_workspace(config, "push changes") as repo_root:
                self._git.add_all(repo_root)
                self._git.commit(
                    repo_root,
                    commit_message,
                    author_name=config.bot_name,
                    author_email=config.bot_email,
                )
                push = self._git.push_current_branch(
                    repo_root, FORK_REMOTE, token=config.bot_token
                )
        except RuntimeError:
            logger.error("Commit before push failed", exc_info=True)
            return GitWorkflowError(
                operation="push",
                target=FORK_REMOTE,
                message="Could not successfully perform 'git push'",
            )

        if isinstance(push, PushError):
            logger.error("Push to %s failed (%s): %s", FORK_REMOTE, push.error_type, push.message)
            if push.auth_rejected:
                return InvalidToken(
                    remote=FORK_REMOTE,
                    message=f"Wrong bot token: '{FORK_REMOTE}' rejected the credentials",
                )
            return GitWorkflowError(
                operation="push",
                target=FORK_REMOTE,
                message="Could not successfully perform 'git push'",
            )

        logger.info("Pushed %s to %s", push.branch, push.remote)
        return ChangesPushed(remote=push.remote, branch_name=push.branch)
