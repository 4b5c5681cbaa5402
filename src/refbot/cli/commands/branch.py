"""Branch commands: create and switch task branches."""

import click

from refbot.cli.core import require_repository
from refbot.cli.ensure_ideal import EnsureIdeal
from refbot.context import RefbotContext
from refbot.output import user_output
from refbot.workspace.engine import FORK_REMOTE
from refbot.workspace.types import BranchCreated


@click.group("branch")
def branch_group() -> None:
    """Create and switch task branches in a workspace."""


@branch_group.command("create")
@click.argument("configuration_id")
@click.argument("source_branch")
@click.argument("new_branch")
@click.option(
    "--remote",
    default=FORK_REMOTE,
    show_default=True,
    help="Remote whose copy of SOURCE_BRANCH the new branch starts from and tracks",
)
@click.pass_obj
def create_cmd(
    ctx: RefbotContext,
    configuration_id: str,
    source_branch: str,
    new_branch: str,
    remote: str,
) -> None:
    """Create NEW_BRANCH from REMOTE/SOURCE_BRANCH and check it out."""
    repository = require_repository(ctx, configuration_id)
    created = EnsureIdeal.ideal_state(
        ctx.workspace_engine.create_branch(repository, source_branch, new_branch, remote)
    )
    user_output(
        click.style("✓ ", fg="green")
        + f"Created branch '{created.branch_name}' tracking '{created.start_point}'"
    )


@branch_group.command("switch")
@click.argument("configuration_id")
@click.argument("branch")
@click.pass_obj
def switch_cmd(ctx: RefbotContext, configuration_id: str, branch: str) -> None:
    """Check out BRANCH, recreating it from origin if it is gone locally."""
    repository = require_repository(ctx, configuration_id)
    switched = EnsureIdeal.ideal_state(ctx.workspace_engine.switch_branch(repository, branch))
    if isinstance(switched, BranchCreated):
        user_output(
            click.style("✓ ", fg="green")
            + f"Recreated branch '{switched.branch_name}' from '{switched.start_point}'"
        )
        return
    user_output(click.style("✓ ", fg="green") + f"Switched to branch '{switched.branch_name}'")
