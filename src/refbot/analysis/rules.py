"""Analyzer rule -> refactoring operation table.

Adding support for a rule means adding an entry to DEFAULT_RULES; the
translator never switches on rule ids itself.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from refbot.analysis.types import RefactoringOperation

ParameterExtractor = Callable[[str], str | None]


@dataclass(frozen=True)
class RuleMapping:
    """How one analyzer rule becomes a task.

    Attributes:
        operation: Refactoring the rule maps to
        extract_parameter: Optional function deriving the task parameter
            from the issue message
    """

    operation: RefactoringOperation
    extract_parameter: ParameterExtractor | None = None


def extract_parameter_name(message: str) -> str | None:
    """Extract the parameter name from an "unused parameter" message.

    "Remove this unused method parameter 'value'." -> "value"

    The token after the last "parameter" word is taken and its quoting
    envelope (one leading character, two trailing characters) removed.
    Returns None if the message has no such token.
    """
    tokens = message.split()
    parameter_token: str | None = None
    for index, token in enumerate(tokens[:-1]):
        if token == "parameter":
            parameter_token = tokens[index + 1]

    if parameter_token is None or len(parameter_token) < 4:
        return None
    return parameter_token[1:-2]


UNKNOWN_RULE = RuleMapping(operation=RefactoringOperation.UNKNOWN)

DEFAULT_RULES: Mapping[str, RuleMapping] = {
    "squid:S1161": RuleMapping(operation=RefactoringOperation.ADD_OVERRIDE_ANNOTATION),
    "squid:ModifiersOrderCheck": RuleMapping(operation=RefactoringOperation.REORDER_MODIFIER),
    "squid:CommentedOutCodeLine": RuleMapping(
        operation=RefactoringOperation.REMOVE_COMMENTED_OUT_CODE
    ),
    "squid:S1172": RuleMapping(
        operation=RefactoringOperation.REMOVE_PARAMETER,
        extract_parameter=extract_parameter_name,
    ),
}
