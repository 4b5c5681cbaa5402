"""Workspace setup commands: init, fetch, stash-apply."""

import click

from refbot.cli.core import require_repository
from refbot.cli.ensure_ideal import EnsureIdeal
from refbot.context import RefbotContext
from refbot.output import user_output


@click.group("workspace")
def workspace_group() -> None:
    """Manage the local checkout of a configured repository."""


@workspace_group.command("init")
@click.argument("configuration_id")
@click.pass_obj
def init_cmd(ctx: RefbotContext, configuration_id: str) -> None:
    """Clone the fork and add the upstream remote."""
    repository = require_repository(ctx, configuration_id)
    ready = EnsureIdeal.ideal_state(ctx.workspace_engine.init_workspace(repository))
    user_output(click.style("✓ ", fg="green") + f"Workspace ready at {ready.workspace}")


@workspace_group.command("fetch")
@click.argument("configuration_id")
@click.pass_obj
def fetch_cmd(ctx: RefbotContext, configuration_id: str) -> None:
    """Fetch all refs from the upstream remote."""
    repository = require_repository(ctx, configuration_id)
    fetched = EnsureIdeal.ideal_state(ctx.workspace_engine.fetch_remote(repository))
    user_output(click.style("✓ ", fg="green") + f"Fetched '{fetched.remote}'")


@workspace_group.command("stash-apply")
@click.argument("configuration_id")
@click.pass_obj
def stash_apply_cmd(ctx: RefbotContext, configuration_id: str) -> None:
    """Apply the most recent stash onto the working tree."""
    repository = require_repository(ctx, configuration_id)
    EnsureIdeal.ideal_state(ctx.workspace_engine.stash_changes(repository))
    user_output(click.style("✓ ", fg="green") + "Applied most recent stash")
