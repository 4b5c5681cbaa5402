"""Locate analyzer-reported files inside a checked-out repository.

The analyzer reports paths relative to the directory it analyzed, which is
either the repository root or one of its immediate subdirectories (a module
of a multi-module build). Resolution tries the root first, then each
subdirectory in sorted order.
"""

from pathlib import Path

from refbot.analysis.types import IssuePathNotFound


def component_relative_path(project: str, component: str) -> str | None:
    """Strip the "<project>" prefix and one separator from a component path.

    "my-app:src/Foo.java" with project "my-app" -> "src/Foo.java"

    Returns None for components that do not start with the project key or
    name nothing after it (project-level components).
    """
    if not component.startswith(project):
        return None
    relative = component[len(project) + 1 :]
    if not relative:
        return None
    return relative


def _is_repository_file(repository_root: Path, path: Path) -> bool:
    if not path.is_file():
        return False
    return path.resolve().is_relative_to(repository_root.resolve())


def resolve_issue_path(
    repository_root: Path, project: str, component: str
) -> Path | IssuePathNotFound:
    """Find the file an analyzer component refers to.

    Only regular files inside repository_root match; absolute component
    paths and paths escaping the repository never do.

    Args:
        repository_root: Root of the checked-out repository
        project: Analyzer project key
        component: Analyzer component path, prefixed with the project key

    Returns:
        Path of the existing file, or IssuePathNotFound if neither the root
        nor any immediate subdirectory contains it
    """
    candidate = component_relative_path(project, component)
    if candidate is None or Path(candidate).is_absolute():
        return IssuePathNotFound(
            component=component,
            message=f"Component '{component}' does not name a file of project '{project}'",
        )

    direct = repository_root / candidate
    if _is_repository_file(repository_root, direct):
        return direct

    if repository_root.is_dir():
        subdirectories = sorted(p for p in repository_root.iterdir() if p.is_dir())
        for subdirectory in subdirectories:
            nested = subdirectory / candidate
            if _is_repository_file(repository_root, nested):
                return nested

    return IssuePathNotFound(
        component=component,
        message=f"Unable to locate issue path '{candidate}' under '{repository_root}'",
    )


def relative_to_repository(repository_root: Path, path: Path) -> str:
    """Repository-relative string form of a resolved issue path."""
    return path.relative_to(repository_root).as_posix()
