"""Models for scrapyard."""

from scrapyard.models.model_archive import ArchiveResult
from scrapyard.models.model_yard import (
    CacheEntry,
    CandidatePattern,
    OperationResult,
    Outcome,
    YardContext,
)

__all__ = [
    # Archive models
    "ArchiveResult",
    # Yard models
    "CacheEntry",
    "CandidatePattern",
    "OperationResult",
    "Outcome",
    "YardContext",
]
