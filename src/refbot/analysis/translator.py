"""Translate analyzer issues into located refactoring tasks."""

import logging
import random
from collections.abc import Mapping, Sequence
from pathlib import Path

from refbot.analysis.path_resolver import relative_to_repository, resolve_issue_path
from refbot.analysis.rules import DEFAULT_RULES, UNKNOWN_RULE, RuleMapping
from refbot.analysis.types import IssuePathNotFound, LocatedTask, RawAnalysisIssue
from refbot.gateway.source_files.abc import SourceFiles

logger = logging.getLogger(__name__)

# Seed of the task-order shuffle; fixed so runs over the same issues agree
DEFAULT_SHUFFLE_SEED = 69420


def shuffle_tasks(tasks: list[LocatedTask], seed: int) -> list[LocatedTask]:
    """Deterministically reorder tasks; the same seed always gives the same order."""
    shuffled = list(tasks)
    random.Random(seed).shuffle(shuffled)
    return shuffled


class IssueTranslator:
    """Turns raw analyzer issues into LocatedTasks for one repository checkout."""

    def __init__(
        self,
        source_files: SourceFiles,
        *,
        rules: Mapping[str, RuleMapping] = DEFAULT_RULES,
        shuffle_seed: int | None = DEFAULT_SHUFFLE_SEED,
    ) -> None:
        """Create a translator.

        Args:
            source_files: Enumerates source files and roots of the checkout
            rules: Rule id -> mapping table; unlisted rules become UNKNOWN tasks
            shuffle_seed: Seed of the final reordering step, or None to keep
                the analyzer's order
        """
        self._source_files = source_files
        self._rules = rules
        self._shuffle_seed = shuffle_seed

    def translate(
        self, issues: Sequence[RawAnalysisIssue], repository_root: Path
    ) -> list[LocatedTask] | IssuePathNotFound:
        """Translate all issues.

        Args:
            issues: Analyzer issues to translate
            repository_root: Root of the checked-out repository

        Returns:
            One task per issue, or IssuePathNotFound for the first issue whose
            file could not be located (translation stops there)
        """
        all_source_files = tuple(self._source_files.list_source_files(repository_root))
        source_roots = tuple(self._source_files.find_source_roots(list(all_source_files)))

        tasks: list[LocatedTask] = []
        for issue in issues:
            resolved = resolve_issue_path(repository_root, issue.project, issue.component)
            if isinstance(resolved, IssuePathNotFound):
                logger.error("Issue %s: %s", issue.key, resolved.message)
                return resolved

            mapping = self._rules.get(issue.rule, UNKNOWN_RULE)
            if mapping is UNKNOWN_RULE:
                logger.debug("Issue %s has unmapped rule %s", issue.key, issue.rule)

            parameter = None
            if mapping.extract_parameter is not None:
                parameter = mapping.extract_parameter(issue.message)

            tasks.append(
                LocatedTask(
                    file_path=relative_to_repository(repository_root, resolved),
                    absolute_path=resolved,
                    line=issue.line,
                    issue_key=issue.key,
                    creation_date=issue.creation_date,
                    operation=mapping.operation,
                    refactor_parameter=parameter,
                    all_source_files=all_source_files,
                    source_roots=source_roots,
                )
            )

        logger.info("Translated %d issues for %s", len(tasks), repository_root)
        if self._shuffle_seed is None:
            return tasks
        return shuffle_tasks(tasks, self._shuffle_seed)
