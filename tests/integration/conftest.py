"""Fixtures for tests that drive the real git binary against local repositories."""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

from refbot.config import RepositoryConfiguration

# Identity for fixture setup commits only; the code under test supplies its own
_FIXTURE_IDENTITY = {
    "GIT_AUTHOR_NAME": "Fixture",
    "GIT_AUTHOR_EMAIL": "fixture@example.com",
    "GIT_COMMITTER_NAME": "Fixture",
    "GIT_COMMITTER_EMAIL": "fixture@example.com",
}


def run_git(cwd: Path, *args: str) -> str:
    """Run a fixture git command with a throwaway identity and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
        env={**os.environ, **_FIXTURE_IDENTITY},
    )
    return result.stdout.strip()


def init_git_repo(repo: Path, branch: str) -> None:
    """Initialize a repository with one commit on branch."""
    run_git(repo, "init", "-b", branch)
    (repo / "README.md").write_text("# project\n", encoding="utf-8")
    run_git(repo, "add", "README.md")
    run_git(repo, "commit", "-m", "Initial commit")


@dataclass(frozen=True)
class HostedRepositories:
    """Bare repositories standing in for the bot's fork and the upstream project."""

    seed: Path
    fork: Path
    upstream: Path
    workspaces: Path

    def configuration(self, configuration_id: str) -> RepositoryConfiguration:
        return RepositoryConfiguration(
            configuration_id=configuration_id,
            fork_url=str(self.fork),
            upstream_url=str(self.upstream),
            bot_name="refbot",
            bot_email="refbot@example.com",
            bot_token="unused-for-local-remotes",
        )


@pytest.fixture()
def isolated_git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's global and system git config out of the tests."""
    if shutil.which("git") is None:
        pytest.skip("git not available")
    global_config = tmp_path / "gitconfig"
    global_config.write_text("", encoding="utf-8")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for name in _FIXTURE_IDENTITY:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def hosted(tmp_path: Path, isolated_git_config: None) -> HostedRepositories:
    """A fork with branches main and feature, and an upstream with main only."""
    seed = tmp_path / "seed"
    seed.mkdir()
    init_git_repo(seed, "main")

    fork = tmp_path / "hosted" / "fork.git"
    upstream = tmp_path / "hosted" / "upstream.git"
    for bare in (fork, upstream):
        bare.mkdir(parents=True)
        run_git(bare, "init", "--bare", "-b", "main")
        run_git(seed, "push", str(bare), "main")

    run_git(seed, "checkout", "-b", "feature")
    (seed / "feature.txt").write_text("feature work\n", encoding="utf-8")
    run_git(seed, "add", "feature.txt")
    run_git(seed, "commit", "-m", "Feature work")
    run_git(seed, "push", str(fork), "feature")

    return HostedRepositories(
        seed=seed,
        fork=fork,
        upstream=upstream,
        workspaces=tmp_path / "workspaces",
    )
