"""Abstract interface for the git operations refbot performs on a workspace.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using the git binary via subprocess
- FakeGit: In-memory implementation for tests

Mutation operations raise RuntimeError (with operation context) when git
fails. Push is the exception: it returns PushResult | PushError so callers
can tell a rejected credential apart from any other failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from refbot.gateway.git.types import PushError, PushResult


class Git(ABC):
    """Abstract interface for workspace git operations.

    All implementations (real, fake) must implement this interface.
    """

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """Clone a repository into a new directory.

        Args:
            url: Clone URL of the repository
            destination: Directory to create; must not already contain a repository

        Raises:
            RuntimeError: If the clone cannot complete (network, auth, bad URL)
        """
        ...

    @abstractmethod
    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        """Add a named remote.

        Raises:
            RuntimeError: If the remote already exists or repo_root is not a repository
        """
        ...

    @abstractmethod
    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        """Fetch all refs from a remote.

        Raises:
            RuntimeError: If the fetch fails for any reason
        """
        ...

    @abstractmethod
    def stash_apply(self, repo_root: Path) -> None:
        """Apply the most recent stash entry onto the working tree.

        Raises:
            RuntimeError: If there is no stash entry or applying it conflicts
        """
        ...

    @abstractmethod
    def checkout_new_tracking_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        """Create a branch from a remote-tracking ref, track it, and check it out.

        Command: git checkout -b <branch> --track <start_point>

        Args:
            repo_root: Path to the repository root
            branch: Name of the new local branch
            start_point: Remote ref to start from and track (e.g. 'origin/main')

        Raises:
            RuntimeError: If the branch exists or the start point is unknown
        """
        ...

    @abstractmethod
    def pull_ff_only(self, repo_root: Path) -> None:
        """Pull the current branch from its tracking ref, fast-forward only.

        Raises:
            RuntimeError: If the pull fails
        """
        ...

    @abstractmethod
    def checkout_branch(self, repo_root: Path, branch: str) -> None:
        """Check out an existing local branch.

        Raises:
            RuntimeError: If the checkout fails
        """
        ...

    @abstractmethod
    def add_all(self, repo_root: Path) -> None:
        """Stage all working-tree changes (git add -A)."""
        ...

    @abstractmethod
    def commit(self, repo_root: Path, message: str, *, author_name: str, author_email: str) -> None:
        """Commit staged changes with the given identity as author and committer.

        Raises:
            RuntimeError: If the commit fails
        """
        ...

    @abstractmethod
    def push_current_branch(
        self, repo_root: Path, remote: str, *, token: str
    ) -> PushResult | PushError:
        """Push the checked-out branch to the same-named branch on a remote.

        The token is offered to the remote as the credential username with an
        empty password.

        Args:
            repo_root: Path to the repository root
            remote: Remote name (e.g. "origin")
            token: Access token used as the credential username

        Returns:
            PushResult on success, PushError (with auth_rejected set when the
            remote refused the credential) otherwise
        """
        ...

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def is_repository(self, path: Path) -> bool:
        """Check whether path is the root of a git working copy."""
        ...

    @abstractmethod
    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        """Check whether a local branch (refs/heads/<branch>) exists."""
        ...

    @abstractmethod
    def get_current_branch(self, repo_root: Path) -> str | None:
        """Get the currently checked-out branch.

        Returns:
            Branch name, or None if in detached HEAD state or not a repository
        """
        ...
