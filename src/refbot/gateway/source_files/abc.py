"""Abstract interface for enumerating a repository's source files."""

from abc import ABC, abstractmethod
from pathlib import Path


class SourceFiles(ABC):
    """Lists source files and derives the source roots they live under.

    All implementations (real, fake) must implement this interface.
    """

    @abstractmethod
    def list_source_files(self, root: Path) -> list[str]:
        """List every source file under root.

        Args:
            root: Directory to search recursively

        Returns:
            Absolute file paths as strings, sorted
        """
        ...

    @abstractmethod
    def find_source_roots(self, source_files: list[str]) -> list[str]:
        """Derive the source roots (package hierarchy bases) of the given files.

        Args:
            source_files: Paths returned by list_source_files()

        Returns:
            Distinct source root directories as strings, sorted
        """
        ...
