"""Archiver protocol defining the contract for archive backends."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from scrapyard.models.model_archive import ArchiveResult


class Archiver(Protocol):
    """Protocol for the collaborator that performs archive I/O.

    Scrapyard decides which archive to read or write; an Archiver only moves
    bytes. Failures are reported through ArchiveResult rather than raised, so
    the store can map them to an outcome.
    """

    def create(self, paths: Sequence[str | Path], destination: Path) -> ArchiveResult:
        """Write a gzip-compressed tar of `paths` to `destination`.

        Args:
            paths: Files and directories to archive, relative to the current directory
            destination: Archive file to write (overwritten if present)

        Returns:
            ArchiveResult with success status
        """
        ...

    def extract(self, archive: Path, cwd: Path | None = None) -> ArchiveResult:
        """Extract `archive` into `cwd` (the current directory when None).

        Args:
            archive: Archive file to read
            cwd: Directory to extract into

        Returns:
            ArchiveResult with success status
        """
        ...
