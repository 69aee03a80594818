"""Data models for archiver operations."""

from dataclasses import dataclass, field


@dataclass
class ArchiveResult:
    """Result of a single archive creation or extraction."""

    success: bool
    command: list[str] = field(default_factory=list)
    returncode: int | None = None
    error: str | None = None
    duration_seconds: float = 0.0
