"""Data types for analyzer issues and the refactoring tasks derived from them."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from refbot.non_ideal_state import NonIdealState


class RefactoringOperation(Enum):
    """Refactorings the bot knows how to apply."""

    ADD_OVERRIDE_ANNOTATION = "Add Override Annotation"
    REORDER_MODIFIER = "Reorder Modifier"
    REMOVE_COMMENTED_OUT_CODE = "Remove Commented Out Code"
    REMOVE_PARAMETER = "Remove Parameter"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class RawAnalysisIssue:
    """An issue as reported by the static analyzer.

    Attributes:
        project: Analyzer project key
        component: File path relative to the analysis root, prefixed with
            "<project>:" (e.g. "my-app:src/main/java/Foo.java")
        rule: Analyzer rule identifier (e.g. "squid:S1172")
        message: Human-readable description
        line: 1-based line number
        key: Unique issue key
        creation_date: Creation timestamp as reported by the analyzer
    """

    project: str
    component: str
    rule: str
    message: str
    line: int
    key: str
    creation_date: str


@dataclass(frozen=True)
class LocatedTask:
    """A refactoring task anchored to a file in the checked-out repository.

    Attributes:
        file_path: Path of the file relative to the repository root
        absolute_path: Resolved path of the file on disk
        line: 1-based line number of the finding
        issue_key: Key of the analyzer issue this task was made from
        creation_date: Creation timestamp of that issue
        operation: Refactoring to apply
        refactor_parameter: Operation-specific argument (e.g. the unused
            parameter's name), None when the operation takes none
        all_source_files: Every source file found in the repository
        source_roots: Source roots derived from all_source_files
    """

    file_path: str
    absolute_path: Path
    line: int
    issue_key: str
    creation_date: str
    operation: RefactoringOperation
    refactor_parameter: str | None
    all_source_files: tuple[str, ...]
    source_roots: tuple[str, ...]


@dataclass(frozen=True)
class IssuePathNotFound(NonIdealState):
    """Error: an issue's file was not found in the repository. Implements NonIdealState."""

    component: str
    message: str

    @property
    def error_type(self) -> str:
        return "issue-path-not-found"
