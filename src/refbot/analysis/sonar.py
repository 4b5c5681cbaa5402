"""Read SonarQube issue search results into RawAnalysisIssues.

Consumes the JSON body of SonarQube's ``api/issues/search`` endpoint;
fetching it is up to the caller.
"""

import json
import logging
from pathlib import Path
from typing import Any

from refbot.analysis.types import RawAnalysisIssue

logger = logging.getLogger(__name__)


def parse_sonar_issue(data: dict[str, Any]) -> RawAnalysisIssue | None:
    """Parse one entry of the ``issues`` array.

    Returns:
        The issue, or None for file-level issues that carry no line number

    Raises:
        KeyError: If a required field is missing
    """
    if "line" not in data:
        return None
    return RawAnalysisIssue(
        project=str(data["project"]),
        component=str(data["component"]),
        rule=str(data["rule"]),
        message=str(data.get("message", "")),
        line=int(data["line"]),
        key=str(data["key"]),
        creation_date=str(data.get("creationDate", "")),
    )


def parse_sonar_issues(payload: dict[str, Any]) -> list[RawAnalysisIssue]:
    """Parse an issue search response, keeping the analyzer's order."""
    issues: list[RawAnalysisIssue] = []
    for entry in payload.get("issues", []):
        issue = parse_sonar_issue(entry)
        if issue is None:
            logger.debug("Skipping issue %s without a line number", entry.get("key"))
            continue
        issues.append(issue)
    return issues


def load_sonar_issues(path: Path) -> list[RawAnalysisIssue]:
    """Load and parse an issue search response saved as JSON."""
    return parse_sonar_issues(json.loads(path.read_text(encoding="utf-8")))
