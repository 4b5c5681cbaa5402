"""Production implementation of source file enumeration for Java repositories."""

import logging
import re
from pathlib import Path

from refbot.gateway.source_files.abc import SourceFiles

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".java"

_PACKAGE_DECLARATION = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)


def read_package_name(source: str) -> str | None:
    """Return the package declared in Java source text, or None for the default package."""
    match = _PACKAGE_DECLARATION.search(source)
    if match is None:
        return None
    return match.group(1)


def source_root_for(file_path: Path, package_name: str | None) -> Path:
    """Directory the package hierarchy of file_path starts in.

    src/main/java/org/example/Foo.java with package "org.example"
    -> src/main/java
    """
    directory = file_path.parent
    if package_name is None:
        return directory

    package_parts = package_name.split(".")
    if list(directory.parts[-len(package_parts) :]) != package_parts:
        # Directory layout does not mirror the package; treat the file's own
        # directory as its root
        return directory
    return Path(*directory.parts[: -len(package_parts)])


class RealSourceFiles(SourceFiles):
    """Walks the filesystem for .java files and reads their package declarations."""

    def list_source_files(self, root: Path) -> list[str]:
        files = sorted(
            str(path)
            for path in root.rglob(f"*{SOURCE_SUFFIX}")
            if path.is_file() and ".git" not in path.relative_to(root).parts
        )
        logger.debug("Found %d source files under %s", len(files), root)
        return files

    def find_source_roots(self, source_files: list[str]) -> list[str]:
        roots: set[str] = set()
        for file_name in source_files:
            path = Path(file_name)
            source = path.read_text(encoding="utf-8", errors="replace")
            roots.add(str(source_root_for(path, read_package_name(source))))
        return sorted(roots)
