"""Translate command: turn a saved analyzer report into refactoring tasks."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from refbot.analysis.sonar import load_sonar_issues
from refbot.analysis.translator import DEFAULT_SHUFFLE_SEED, IssueTranslator
from refbot.analysis.types import LocatedTask, RefactoringOperation
from refbot.cli.core import require_repository
from refbot.cli.ensure_ideal import EnsureIdeal
from refbot.context import RefbotContext
from refbot.output import machine_output


def _task_to_json(task: LocatedTask) -> dict[str, object]:
    return {
        "file_path": task.file_path,
        "line": task.line,
        "issue_key": task.issue_key,
        "creation_date": task.creation_date,
        "operation": task.operation.value,
        "refactor_parameter": task.refactor_parameter,
    }


def _render_table(tasks: list[LocatedTask]) -> None:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Issue", style="cyan", no_wrap=True)
    table.add_column("Operation", no_wrap=True)
    table.add_column("File", style="yellow")
    table.add_column("Line", justify="right")
    table.add_column("Parameter")

    for task in tasks:
        if task.operation is RefactoringOperation.UNKNOWN:
            operation_display = f"[dim]{task.operation.value}[/dim]"
        else:
            operation_display = f"[green]{task.operation.value}[/green]"
        table.add_row(
            task.issue_key,
            operation_display,
            task.file_path,
            str(task.line),
            task.refactor_parameter or "-",
        )

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200)
    console.print(table)


@click.command("translate")
@click.argument("configuration_id")
@click.argument("issues_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--seed",
    type=int,
    default=DEFAULT_SHUFFLE_SEED,
    show_default=True,
    help="Seed of the deterministic task reordering",
)
@click.option("--no-shuffle", is_flag=True, help="Keep the analyzer's issue order")
@click.option("--json", "as_json", is_flag=True, help="Print tasks as JSON to stdout")
@click.pass_obj
def translate_cmd(
    ctx: RefbotContext,
    configuration_id: str,
    issues_json: Path,
    seed: int,
    no_shuffle: bool,
    as_json: bool,
) -> None:
    """Translate ISSUES_JSON (a SonarQube issue search response) into tasks."""
    repository = require_repository(ctx, configuration_id)
    issues = load_sonar_issues(issues_json)

    translator = IssueTranslator(ctx.source_files, shuffle_seed=None if no_shuffle else seed)
    tasks = EnsureIdeal.ideal_state(
        translator.translate(issues, ctx.workspace_engine.workspace_path(repository))
    )

    if as_json:
        machine_output(json.dumps([_task_to_json(task) for task in tasks], indent=2))
        return
    _render_table(tasks)
