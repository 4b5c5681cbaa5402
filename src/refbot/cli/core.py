"""Shared helpers for CLI commands."""

import click

from refbot.config import RepositoryConfiguration
from refbot.context import RefbotContext
from refbot.output import user_output


def require_repository(ctx: RefbotContext, configuration_id: str) -> RepositoryConfiguration:
    """Look up a configured repository or exit with an error."""
    try:
        return ctx.config.repository(configuration_id)
    except KeyError:
        user_output(
            click.style("Error: ", fg="red")
            + f"No repository with id '{configuration_id}' is configured"
        )
        raise SystemExit(1) from None
