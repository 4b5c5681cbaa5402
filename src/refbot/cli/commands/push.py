"""Push command: commit all workspace changes and publish them to the fork."""

import click

from refbot.cli.core import require_repository
from refbot.cli.ensure_ideal import EnsureIdeal
from refbot.context import RefbotContext
from refbot.output import user_output


@click.command("push")
@click.argument("configuration_id")
@click.option("-m", "--message", "commit_message", required=True, help="Commit message")
@click.pass_obj
def push_cmd(ctx: RefbotContext, configuration_id: str, commit_message: str) -> None:
    """Commit all changes as the bot and push the current branch to the fork."""
    repository = require_repository(ctx, configuration_id)
    pushed = EnsureIdeal.ideal_state(
        ctx.workspace_engine.push_changes(repository, commit_message)
    )
    user_output(
        click.style("✓ ", fg="green") + f"Pushed '{pushed.branch_name}' to '{pushed.remote}'"
    )
