"""Discriminated union types for Git gateway operations.

PushResult | PushError follows the NonIdealState pattern: the push either
succeeds or reports why it did not, including whether the remote rejected
the supplied credentials.
"""

from dataclasses import dataclass

from refbot.non_ideal_state import NonIdealState


@dataclass(frozen=True)
class PushResult:
    """Success result from pushing to a remote."""

    remote: str
    branch: str


@dataclass(frozen=True)
class PushError(NonIdealState):
    """Error result from pushing to a remote. Implements NonIdealState."""

    message: str
    auth_rejected: bool

    @property
    def error_type(self) -> str:
        if self.auth_rejected:
            return "push-auth-rejected"
        return "push-failed"
