"""Fake implementation of source file enumeration for testing."""

from pathlib import Path

from refbot.gateway.source_files.abc import SourceFiles


class FakeSourceFiles(SourceFiles):
    """In-memory fake returning pre-configured files and roots.

    Constructor Injection:
    ---------------------
    - source_files: Files returned by list_source_files() for any root
    - source_roots: Roots returned by find_source_roots()

    Mutation Tracking:
    -----------------
    - listed_roots: Roots list_source_files() was called with
    """

    def __init__(
        self,
        *,
        source_files: list[str] | None = None,
        source_roots: list[str] | None = None,
    ) -> None:
        self._source_files = list(source_files or [])
        self._source_roots = list(source_roots or [])
        self._listed_roots: list[Path] = []

    def list_source_files(self, root: Path) -> list[str]:
        self._listed_roots.append(root)
        return list(self._source_files)

    def find_source_roots(self, source_files: list[str]) -> list[str]:
        return list(self._source_roots)

    @property
    def listed_roots(self) -> list[Path]:
        return list(self._listed_roots)
