"""Output helpers separating user-facing messages from machine-readable data.

user_output() writes to stderr so that stdout stays clean for data a caller
may pipe (JSON, line numbers), which goes through machine_output().
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a message for humans to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write data meant for other programs to stdout."""
    click.echo(message, nl=nl)
