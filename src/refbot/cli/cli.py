import logging
from pathlib import Path

import click

from refbot.cli.commands.branch import branch_group
from refbot.cli.commands.hunk import hunk_position_cmd
from refbot.cli.commands.push import push_cmd
from refbot.cli.commands.translate import translate_cmd
from refbot.cli.commands.workspace import workspace_group
from refbot.config import DEFAULT_CONFIG_PATH
from refbot.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="refbot")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to the bot's config.toml",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_path: Path) -> None:
    """Drive a refactoring bot's git workspaces and analyzer issues."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(config_path)


cli.add_command(workspace_group)
cli.add_command(branch_group)
cli.add_command(push_cmd)
cli.add_command(hunk_position_cmd)
cli.add_command(translate_cmd)


def main() -> None:
    """CLI entry point used by the `refbot` console script."""
    cli()
