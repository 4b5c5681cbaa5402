"""Hunk position command: print the new-file line of a diff hunk's last line."""

from typing import TextIO

import click

from refbot.output import machine_output, user_output
from refbot.review.diff_hunk import InvalidDiffHunkError, last_line_number


@click.command("hunk-position")
@click.argument("hunk_file", type=click.File("r", encoding="utf-8"), default="-")
def hunk_position_cmd(hunk_file: TextIO) -> None:
    """Print the post-change line number of the last line of a diff hunk.

    Reads the hunk from HUNK_FILE, or stdin when omitted.
    """
    diff_hunk = hunk_file.read()
    try:
        line = last_line_number(diff_hunk)
    except InvalidDiffHunkError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e
    machine_output(str(line))
