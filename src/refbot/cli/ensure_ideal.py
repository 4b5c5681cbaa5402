"""CLI error handling for non-ideal-state type narrowing.

Operations in refbot return discriminated unions of a success value and
NonIdealState failures. EnsureIdeal narrows those unions at the CLI boundary,
exiting with a user-friendly error for the failure cases.
"""

from typing import TypeVar

import click

from refbot.non_ideal_state import NonIdealState
from refbot.output import user_output

T = TypeVar("T")


class EnsureIdeal:
    """Helper class for narrowing non-ideal-state discriminated unions."""

    @staticmethod
    def ideal_state(result: T | NonIdealState) -> T:
        """Ensure result is not a NonIdealState, otherwise exit with error.

        Args:
            result: Value that may be a NonIdealState

        Returns:
            The value unchanged if not NonIdealState (with narrowed type T)

        Raises:
            SystemExit: If result is NonIdealState (with exit code 1)
        """
        if isinstance(result, NonIdealState):
            user_output(click.style("Error: ", fg="red") + result.message)
            raise SystemExit(1)
        return result
