"""Base type for expected, non-exceptional failure results.

Operations that can fail in ways callers are expected to handle return a
discriminated union of a success marker and one or more NonIdealState
subclasses instead of raising. Every NonIdealState carries a user-facing
message and a stable error_type tag.
"""

from abc import ABC, abstractmethod


class NonIdealState(ABC):
    """Marker base class for frozen-dataclass failure results."""

    message: str

    @property
    @abstractmethod
    def error_type(self) -> str:
        """Stable kebab-case identifier for this kind of failure."""
        ...
