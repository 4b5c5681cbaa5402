"""Dependency holder threaded through the CLI.

RefbotContext is created once at the CLI entry point and passed to commands
through Click's context object. Tests build one with context_for_test() and
inject it with ``runner.invoke(cli, [...], obj=ctx)``.
"""

from dataclasses import dataclass
from pathlib import Path

from refbot.config import BotConfig, RepositoryConfiguration, load_config
from refbot.gateway.git.abc import Git
from refbot.gateway.git.fake import FakeGit
from refbot.gateway.git.real import RealGit
from refbot.gateway.source_files.abc import SourceFiles
from refbot.gateway.source_files.fake import FakeSourceFiles
from refbot.gateway.source_files.real import RealSourceFiles
from refbot.workspace.engine import GitWorkspaceEngine


@dataclass(frozen=True)
class RefbotContext:
    """Immutable context holding configuration and gateways."""

    config: BotConfig
    git: Git
    source_files: SourceFiles

    @property
    def workspace_engine(self) -> GitWorkspaceEngine:
        return GitWorkspaceEngine(self.git, self.config.workspace_root)


def create_context(config_path: Path) -> RefbotContext:
    """Create the production context with real gateways."""
    return RefbotContext(
        config=load_config(config_path),
        git=RealGit(),
        source_files=RealSourceFiles(),
    )


def context_for_test(
    *,
    workspace_root: Path,
    repositories: tuple[RepositoryConfiguration, ...] = (),
    git: Git | None = None,
    source_files: SourceFiles | None = None,
) -> RefbotContext:
    """Create a context backed by fakes unless real gateways are passed in."""
    return RefbotContext(
        config=BotConfig(workspace_root=workspace_root, repositories=repositories),
        git=git if git is not None else FakeGit(),
        source_files=source_files if source_files is not None else FakeSourceFiles(),
    )
