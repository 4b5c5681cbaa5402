"""Fake implementation of the Git gateway for testing."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from refbot.gateway.git.abc import Git
from refbot.gateway.git.types import PushError, PushResult


class CommitRecord(NamedTuple):
    repo_root: Path
    message: str
    author_name: str
    author_email: str


class PushRecord(NamedTuple):
    repo_root: Path
    remote: str
    branch: str
    token: str


class FakeGit(Git):
    """In-memory fake implementation of workspace git operations.

    This fake accepts pre-configured state in its constructor and tracks
    mutations for test assertions. It models just enough of git for the
    workspace lifecycle: which directories are repositories, their remotes,
    local branches, remote-tracking refs, the checked-out branch and the
    stash depth.

    Constructor Injection:
    ---------------------
    - hosted_repositories: Mapping of clone URL -> branch names the hosted
      repository has. Cloning or fetching an unknown URL fails.
    - repositories: Workspaces that already exist, mapping repo_root ->
      {remote name: URL}
    - local_branches: Mapping of repo_root -> local branch names
    - current_branches: Mapping of repo_root -> checked-out branch
    - stash_depths: Mapping of repo_root -> number of stash entries
    - push_result: Result returned by push_current_branch (success by default)
    - pull_raises: Exception to raise when pull_ff_only() is called
    - commit_raises: Exception to raise when commit() is called

    Mutation Tracking:
    -----------------
    - cloned: List of (url, destination) tuples
    - added_remotes: List of (repo_root, name, url) tuples
    - fetched_remotes: List of (repo_root, remote) tuples
    - stash_applies: List of repo_roots stash_apply() succeeded on
    - created_branches: List of (repo_root, branch, start_point) tuples
    - checked_out_branches: List of (repo_root, branch) tuples
    - pulls: List of repo_roots pulled
    - staged: List of repo_roots add_all() ran on
    - commits: List of CommitRecord
    - pushes: List of PushRecord for successful pushes
    """

    def __init__(
        self,
        *,
        hosted_repositories: dict[str, list[str]] | None = None,
        repositories: dict[Path, dict[str, str]] | None = None,
        local_branches: dict[Path, set[str]] | None = None,
        current_branches: dict[Path, str] | None = None,
        stash_depths: dict[Path, int] | None = None,
        push_result: PushResult | PushError | None = None,
        pull_raises: Exception | None = None,
        commit_raises: Exception | None = None,
    ) -> None:
        self._hosted = {url: list(branches) for url, branches in (hosted_repositories or {}).items()}
        self._remotes = {root: dict(remotes) for root, remotes in (repositories or {}).items()}
        self._local_branches = {
            root: set(branches) for root, branches in (local_branches or {}).items()
        }
        self._current_branches = dict(current_branches or {})
        self._stash_depths = dict(stash_depths or {})
        self._push_result = push_result
        self._pull_raises = pull_raises
        self._commit_raises = commit_raises

        # Remote-tracking refs ("origin/main") per repository, derived from remotes
        self._remote_refs: dict[Path, set[str]] = {}
        for root, remotes in self._remotes.items():
            for name, url in remotes.items():
                self._record_remote_refs(root, name, url)

        # Mutation tracking
        self._cloned: list[tuple[str, Path]] = []
        self._added_remotes: list[tuple[Path, str, str]] = []
        self._fetched_remotes: list[tuple[Path, str]] = []
        self._stash_applies: list[Path] = []
        self._created_branches: list[tuple[Path, str, str]] = []
        self._checked_out_branches: list[tuple[Path, str]] = []
        self._pulls: list[Path] = []
        self._staged: list[Path] = []
        self._commits: list[CommitRecord] = []
        self._pushes: list[PushRecord] = []

    def _record_remote_refs(self, repo_root: Path, remote: str, url: str) -> None:
        refs = self._remote_refs.setdefault(repo_root, set())
        for branch in self._hosted.get(url, []):
            refs.add(f"{remote}/{branch}")

    def _require_repository(self, repo_root: Path, operation: str) -> None:
        if repo_root not in self._remotes:
            raise RuntimeError(f"Failed to {operation}: '{repo_root}' is not a git repository")

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def clone(self, url: str, destination: Path) -> None:
        operation = f"clone '{url}' into '{destination}'"
        if destination in self._remotes:
            raise RuntimeError(f"Failed to {operation}: destination already exists")
        if url not in self._hosted:
            raise RuntimeError(f"Failed to {operation}: repository not found")

        self._remotes[destination] = {"origin": url}
        self._record_remote_refs(destination, "origin", url)
        branches = self._hosted[url]
        self._local_branches[destination] = set(branches[:1])
        if branches:
            self._current_branches[destination] = branches[0]
        self._cloned.append((url, destination))

    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        operation = f"add remote '{name}' -> '{url}'"
        self._require_repository(repo_root, operation)
        if name in self._remotes[repo_root]:
            raise RuntimeError(f"Failed to {operation}: remote {name} already exists")
        self._remotes[repo_root][name] = url
        self._added_remotes.append((repo_root, name, url))

    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        operation = f"fetch from remote '{remote}'"
        self._require_repository(repo_root, operation)
        url = self._remotes[repo_root].get(remote)
        if url is None or url not in self._hosted:
            raise RuntimeError(f"Failed to {operation}: could not read from remote repository")
        self._record_remote_refs(repo_root, remote, url)
        self._fetched_remotes.append((repo_root, remote))

    def stash_apply(self, repo_root: Path) -> None:
        self._require_repository(repo_root, "apply most recent stash")
        if self._stash_depths.get(repo_root, 0) == 0:
            raise RuntimeError("Failed to apply most recent stash: No stash entries found.")
        self._stash_applies.append(repo_root)

    def checkout_new_tracking_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        operation = f"create branch '{branch}' tracking '{start_point}'"
        self._require_repository(repo_root, operation)
        if branch in self._local_branches.get(repo_root, set()):
            raise RuntimeError(f"Failed to {operation}: a branch named '{branch}' already exists")
        if start_point not in self._remote_refs.get(repo_root, set()):
            raise RuntimeError(f"Failed to {operation}: '{start_point}' is not a valid ref")
        self._local_branches.setdefault(repo_root, set()).add(branch)
        self._current_branches[repo_root] = branch
        self._created_branches.append((repo_root, branch, start_point))

    def pull_ff_only(self, repo_root: Path) -> None:
        self._require_repository(repo_root, "pull current branch")
        if self._pull_raises is not None:
            raise self._pull_raises
        self._pulls.append(repo_root)

    def checkout_branch(self, repo_root: Path, branch: str) -> None:
        operation = f"checkout branch '{branch}'"
        self._require_repository(repo_root, operation)
        if branch not in self._local_branches.get(repo_root, set()):
            raise RuntimeError(f"Failed to {operation}: pathspec '{branch}' did not match")
        self._current_branches[repo_root] = branch
        self._checked_out_branches.append((repo_root, branch))

    def add_all(self, repo_root: Path) -> None:
        self._require_repository(repo_root, "stage all changes")
        self._staged.append(repo_root)

    def commit(self, repo_root: Path, message: str, *, author_name: str, author_email: str) -> None:
        self._require_repository(repo_root, "create commit")
        if self._commit_raises is not None:
            raise self._commit_raises
        self._commits.append(
            CommitRecord(
                repo_root=repo_root,
                message=message,
                author_name=author_name,
                author_email=author_email,
            )
        )

    def push_current_branch(
        self, repo_root: Path, remote: str, *, token: str
    ) -> PushResult | PushError:
        branch = self._current_branches.get(repo_root)
        if branch is None:
            return PushError(
                message=f"Cannot push from '{repo_root}': no branch is checked out",
                auth_rejected=False,
            )
        if self._push_result is not None and not isinstance(self._push_result, PushResult):
            return self._push_result
        self._pushes.append(PushRecord(repo_root=repo_root, remote=remote, branch=branch, token=token))
        return PushResult(remote=remote, branch=branch)

    # ============================================================================
    # Query Operations
    # ============================================================================

    def is_repository(self, path: Path) -> bool:
        return path in self._remotes

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        return branch in self._local_branches.get(repo_root, set())

    def get_current_branch(self, repo_root: Path) -> str | None:
        return self._current_branches.get(repo_root)

    def get_remotes(self, repo_root: Path) -> dict[str, str]:
        """Test helper: remotes configured for a repository."""
        return dict(self._remotes.get(repo_root, {}))

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def cloned(self) -> list[tuple[str, Path]]:
        return list(self._cloned)

    @property
    def added_remotes(self) -> list[tuple[Path, str, str]]:
        return list(self._added_remotes)

    @property
    def fetched_remotes(self) -> list[tuple[Path, str]]:
        return list(self._fetched_remotes)

    @property
    def stash_applies(self) -> list[Path]:
        return list(self._stash_applies)

    @property
    def created_branches(self) -> list[tuple[Path, str, str]]:
        return list(self._created_branches)

    @property
    def checked_out_branches(self) -> list[tuple[Path, str]]:
        return list(self._checked_out_branches)

    @property
    def pulls(self) -> list[Path]:
        return list(self._pulls)

    @property
    def staged(self) -> list[Path]:
        return list(self._staged)

    @property
    def commits(self) -> list[CommitRecord]:
        return list(self._commits)

    @property
    def pushes(self) -> list[PushRecord]:
        return list(self._pushes)
