"""Models describing the yard, its entries and operation outcomes."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scrapyard.consts import DEFAULT_YARD


class Outcome(str, Enum):
    """Result of a single yard operation."""

    RESTORED = "restored"
    MISS = "miss"
    EXTRACT_FAILED = "extract_failed"
    STORED = "stored"
    CREATE_FAILED = "create_failed"
    JUNKED = "junked"
    CRUSHED = "crushed"


class YardContext(BaseModel):
    """Everything an operation needs to know about its environment.

    Passed explicitly into Scrapyard so that no operation depends on
    process-wide configuration.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    yard: Path = Field(default=DEFAULT_YARD, description="Cache root directory")
    verbose: bool = Field(default=False, description="Emit debug-level detail")
    log: logging.Logger = Field(
        default_factory=lambda: logging.getLogger("scrapyard"),
        description="Sink for operation logging",
    )

    @field_validator("yard", mode="before")
    @classmethod
    def _absolute_yard(cls, value: Path | str | None) -> Path:
        if value is None or value == "":
            return DEFAULT_YARD
        return Path(value).expanduser().absolute()


@dataclass(frozen=True)
class CacheEntry:
    """An archive file living directly under the yard."""

    path: Path
    resolved_key: str
    mtime: float
    size: int

    @classmethod
    def from_path(cls, path: Path, resolved_key: str) -> "CacheEntry":
        stat = path.stat()
        return cls(path=path, resolved_key=resolved_key, mtime=stat.st_mtime, size=stat.st_size)


@dataclass(frozen=True)
class CandidatePattern:
    """Glob pattern for the archives of one resolved key."""

    resolved_key: str
    pattern: str


@dataclass
class OperationResult:
    """Result of a search, dump, junk or crush call."""

    outcome: Outcome
    archive: Path | None = None
    removed: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)
    error: str | None = None
