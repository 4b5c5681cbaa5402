"""Bot configuration loaded from TOML.

Example config.toml:
  workspace_root = "~/.refbot/workspaces"

  [[repositories]]
  id = "42"
  fork_url = "https://github.com/refbot/project.git"
  upstream_url = "https://github.com/owner/project.git"
  bot_name = "refbot"
  bot_email = "refbot@example.com"
  bot_token = "ghp_..."
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("~/.refbot/config.toml")
DEFAULT_WORKSPACE_ROOT = Path("~/.refbot/workspaces")

# Overrides bot_token for every repository when set
BOT_TOKEN_ENV_VAR = "REFBOT_BOT_TOKEN"


@dataclass(frozen=True)
class RepositoryConfiguration:
    """Identifies one task's workspace and the bot identity used in it.

    The workspace directory is derived from configuration_id, so exactly one
    local checkout exists per configuration.
    """

    configuration_id: str
    fork_url: str
    upstream_url: str
    bot_name: str
    bot_email: str
    bot_token: str = field(repr=False)


@dataclass(frozen=True)
class BotConfig:
    """In-memory representation of config.toml."""

    workspace_root: Path
    repositories: tuple[RepositoryConfiguration, ...]

    def repository(self, configuration_id: str) -> RepositoryConfiguration:
        """Look up a repository configuration by id.

        Raises:
            KeyError: If no repository with that id is configured
        """
        for repository in self.repositories:
            if repository.configuration_id == configuration_id:
                return repository
        raise KeyError(configuration_id)


def _parse_repository(data: dict[str, object], token_override: str | None) -> RepositoryConfiguration:
    missing = [
        key
        for key in ("id", "fork_url", "upstream_url", "bot_name", "bot_email")
        if key not in data
    ]
    if missing:
        raise ValueError(f"Repository entry is missing required keys: {', '.join(missing)}")

    token = token_override if token_override is not None else str(data.get("bot_token", ""))
    return RepositoryConfiguration(
        configuration_id=str(data["id"]),
        fork_url=str(data["fork_url"]),
        upstream_url=str(data["upstream_url"]),
        bot_name=str(data["bot_name"]),
        bot_email=str(data["bot_email"]),
        bot_token=token,
    )


def load_config(path: Path) -> BotConfig:
    """Load config.toml if present; otherwise return defaults.

    Args:
        path: Path to the TOML file (``~`` is expanded)

    Returns:
        BotConfig with parsed values, or an empty default config if the file
        doesn't exist

    Raises:
        ValueError: If a repository entry lacks a required key or two entries
            share an id
    """
    cfg_path = path.expanduser()
    if not cfg_path.exists():
        return BotConfig(workspace_root=DEFAULT_WORKSPACE_ROOT.expanduser(), repositories=())

    data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))

    workspace_root = Path(str(data.get("workspace_root", DEFAULT_WORKSPACE_ROOT))).expanduser()
    token_override = os.environ.get(BOT_TOKEN_ENV_VAR)
    repositories = tuple(
        _parse_repository(entry, token_override) for entry in data.get("repositories", [])
    )

    seen: set[str] = set()
    for repository in repositories:
        if repository.configuration_id in seen:
            raise ValueError(f"Duplicate repository id in config: {repository.configuration_id}")
        seen.add(repository.configuration_id)

    return BotConfig(workspace_root=workspace_root, repositories=repositories)
