"""Shared values for CLI command tests."""

from pathlib import Path

from refbot.config import RepositoryConfiguration

FORK_URL = "https://git.example.com/refbot/project.git"
UPSTREAM_URL = "https://git.example.com/owner/project.git"
WORKSPACES = Path("/workspaces")
WORKSPACE = WORKSPACES / "1"

REPOSITORY = RepositoryConfiguration(
    configuration_id="1",
    fork_url=FORK_URL,
    upstream_url=UPSTREAM_URL,
    bot_name="refbot",
    bot_email="refbot@example.com",
    bot_token="secret-token",
)
