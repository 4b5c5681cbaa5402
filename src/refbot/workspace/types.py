"""Result types for workspace operations.

Each engine operation returns a success marker or one of the NonIdealState
failures below:

- GitWorkflowError: a git step could not complete
- BranchAlreadyExists: the branch for a task is already there, meaning the
  task was processed by an earlier run whose branch outlived the bot's own
  bookkeeping
- InvalidToken: the remote refused the bot's push credential
"""

from dataclasses import dataclass
from pathlib import Path

from refbot.non_ideal_state import NonIdealState


@dataclass(frozen=True)
class WorkspaceCloned:
    """Success result from cloning the fork into the workspace."""

    workspace: Path


@dataclass(frozen=True)
class RemoteAdded:
    """Success result from adding the upstream remote."""

    name: str
    url: str


@dataclass(frozen=True)
class WorkspaceReady:
    """Success result from initializing a workspace (clone + upstream remote)."""

    workspace: Path


@dataclass(frozen=True)
class RemoteFetched:
    """Success result from fetching the upstream remote."""

    remote: str


@dataclass(frozen=True)
class StashApplied:
    """Success result from applying the most recent stash."""


@dataclass(frozen=True)
class BranchCreated:
    """Success result from creating and checking out a tracking branch."""

    branch_name: str
    start_point: str


@dataclass(frozen=True)
class BranchSwitched:
    """Success result from checking out an existing local branch."""

    branch_name: str


@dataclass(frozen=True)
class ChangesPushed:
    """Success result from committing and pushing workspace changes."""

    remote: str
    branch_name: str


@dataclass(frozen=True)
class GitWorkflowError(NonIdealState):
    """Error: a git operation could not complete. Implements NonIdealState.

    Attributes:
        operation: Short tag of the failed operation (e.g. "clone", "push")
        target: What the operation acted on (URL, branch name, remote)
        message: User-facing description
    """

    operation: str
    target: str
    message: str

    @property
    def error_type(self) -> str:
        return "git-workflow-failed"


@dataclass(frozen=True)
class BranchAlreadyExists(NonIdealState):
    """Error: branch already exists. Implements NonIdealState."""

    branch_name: str
    message: str

    @property
    def error_type(self) -> str:
        return "branch-already-exists"


@dataclass(frozen=True)
class InvalidToken(NonIdealState):
    """Error: the remote rejected the bot's token. Implements NonIdealState."""

    remote: str
    message: str

    @property
    def error_type(self) -> str:
        return "invalid-token"
