"""Integration tests for GitWorkspaceEngine with RealGit.

Each test works against bare repositories on the local filesystem, so no
network or credentials are involved.
"""

from dataclasses import replace
from pathlib import Path

import pytest

from refbot.gateway.git.real import RealGit
from refbot.workspace.engine import GitWorkspaceEngine
from refbot.workspace.types import (
    BranchAlreadyExists,
    BranchCreated,
    BranchSwitched,
    ChangesPushed,
    GitWorkflowError,
    RemoteFetched,
    StashApplied,
    WorkspaceReady,
)
from tests.integration.conftest import HostedRepositories, run_git

pytestmark = pytest.mark.integration


def _ready_engine(hosted: HostedRepositories) -> tuple[GitWorkspaceEngine, Path]:
    engine = GitWorkspaceEngine(RealGit(), hosted.workspaces)
    result = engine.init_workspace(hosted.configuration("1"))
    assert isinstance(result, WorkspaceReady)
    return engine, result.workspace


def test_init_workspace_wires_both_remotes(hosted: HostedRepositories) -> None:
    _, workspace = _ready_engine(hosted)

    assert workspace == hosted.workspaces / "1"
    assert run_git(workspace, "remote", "get-url", "origin") == str(hosted.fork)
    assert run_git(workspace, "remote", "get-url", "upstream") == str(hosted.upstream)
    assert RealGit().is_repository(workspace)


def test_init_workspace_with_bad_fork_url_fails(hosted: HostedRepositories, tmp_path: Path) -> None:
    engine = GitWorkspaceEngine(RealGit(), hosted.workspaces)
    config = hosted.configuration("2")
    broken = replace(config, fork_url=str(tmp_path / "missing.git"))

    result = engine.init_workspace(broken)

    assert isinstance(result, GitWorkflowError)
    assert result.operation == "clone"


def test_add_remote_twice_fails(hosted: HostedRepositories) -> None:
    engine, _ = _ready_engine(hosted)

    result = engine.add_remote(hosted.configuration("1"))

    assert isinstance(result, GitWorkflowError)
    assert result.target == str(hosted.upstream)


def test_fetch_remote_brings_in_upstream_refs(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)

    result = engine.fetch_remote(hosted.configuration("1"))

    assert result == RemoteFetched(remote="upstream")
    assert run_git(workspace, "rev-parse", "--verify", "upstream/main")


def test_create_branch_twice_is_semantic_conflict(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)
    config = hosted.configuration("1")
    engine.fetch_remote(config)

    first = engine.create_branch(config, "main", "refbot-issue-1", "upstream")
    second = engine.create_branch(config, "main", "refbot-issue-1", "upstream")

    assert first == BranchCreated(branch_name="refbot-issue-1", start_point="upstream/main")
    assert run_git(workspace, "rev-parse", "--abbrev-ref", "refbot-issue-1@{upstream}") == (
        "upstream/main"
    )
    assert isinstance(second, BranchAlreadyExists)


def test_switch_branch_to_existing_local_branch(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)
    config = hosted.configuration("1")
    engine.create_branch(config, "main", "refbot-issue-1", "origin")

    result = engine.switch_branch(config, "main")

    assert result == BranchSwitched(branch_name="main")
    assert RealGit().get_current_branch(workspace) == "main"


def test_switch_branch_recreates_branch_from_origin(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)

    result = engine.switch_branch(hosted.configuration("1"), "feature")

    assert result == BranchCreated(branch_name="feature", start_point="origin/feature")
    assert (workspace / "feature.txt").exists()


def test_switch_branch_missing_everywhere_fails(hosted: HostedRepositories) -> None:
    engine, _ = _ready_engine(hosted)

    result = engine.switch_branch(hosted.configuration("1"), "nowhere")

    assert isinstance(result, GitWorkflowError)


def test_stash_changes(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)
    config = hosted.configuration("1")
    (workspace / "README.md").write_text("# stashed edit\n", encoding="utf-8")
    run_git(workspace, "stash")

    result = engine.stash_changes(config)

    assert result == StashApplied()
    assert (workspace / "README.md").read_text(encoding="utf-8") == "# stashed edit\n"


def test_stash_changes_without_stash_fails(hosted: HostedRepositories) -> None:
    engine, _ = _ready_engine(hosted)

    result = engine.stash_changes(hosted.configuration("1"))

    assert isinstance(result, GitWorkflowError)


def test_push_changes_commits_as_bot(hosted: HostedRepositories) -> None:
    engine, workspace = _ready_engine(hosted)
    config = hosted.configuration("1")
    engine.create_branch(config, "main", "refbot-issue-1", "origin")
    (workspace / "Fixed.java").write_text("class Fixed {}\n", encoding="utf-8")

    result = engine.push_changes(config, "Add override annotation")

    assert result == ChangesPushed(remote="origin", branch_name="refbot-issue-1")
    log = run_git(
        hosted.fork, "log", "-1", "--format=%s|%an|%ae|%cn|%ce", "refbot-issue-1"
    )
    assert log == (
        "Add override annotation|refbot|refbot@example.com|refbot|refbot@example.com"
    )
    assert run_git(hosted.fork, "show", "refbot-issue-1:Fixed.java") == "class Fixed {}"


def test_operations_on_missing_workspace_fail(hosted: HostedRepositories) -> None:
    engine = GitWorkspaceEngine(RealGit(), hosted.workspaces)
    config = hosted.configuration("never-initialized")

    assert isinstance(engine.fetch_remote(config), GitWorkflowError)
    assert isinstance(engine.create_branch(config, "main", "x", "origin"), GitWorkflowError)
    assert isinstance(engine.push_changes(config, "msg"), GitWorkflowError)
