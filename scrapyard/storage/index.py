"""Mapping resolved keys to archive files in the yard.

Selection rules:
- Each key contributes at most one candidate: its newest archive by mtime,
  ties broken by the lexicographically greatest path.
- Across keys, caller order wins. The first key with any archive is used even
  if a later key has a newer one.
"""

import glob
import logging
from collections.abc import Sequence
from pathlib import Path

from scrapyard.models.model_yard import CacheEntry, CandidatePattern

logger = logging.getLogger(__name__)


def candidate_paths(
    yard: Path,
    resolved_keys: Sequence[str],
    suffix: str,
) -> list[CandidatePattern]:
    """Build one `<yard>/<resolved_key><suffix>` glob pattern per key.

    The yard and key are escaped so that only the suffix can contain
    wildcards.
    """
    return [
        CandidatePattern(resolved_key=key, pattern=glob.escape(str(yard / key)) + suffix)
        for key in resolved_keys
    ]


def _newest(entries: list[CacheEntry]) -> CacheEntry | None:
    if not entries:
        return None
    return max(entries, key=lambda entry: (entry.mtime, str(entry.path)))


def resolve_globs(patterns: Sequence[CandidatePattern]) -> list[CacheEntry | None]:
    """Collapse each pattern's matches to its newest archive.

    Returns:
        One item per pattern, in order; None where nothing matched.
    """
    groups: list[CacheEntry | None] = []
    for candidate in patterns:
        entries = []
        for match in sorted(glob.glob(candidate.pattern)):
            path = Path(match)
            if not path.is_file():
                continue
            try:
                entries.append(CacheEntry.from_path(path, candidate.resolved_key))
            except FileNotFoundError:
                # Removed between glob and stat
                logger.debug(f"Candidate vanished: {path}")
        groups.append(_newest(entries))
    return groups


def select_best(groups: Sequence[CacheEntry | None]) -> CacheEntry | None:
    """Return the first non-empty group in key order."""
    for entry in groups:
        if entry is not None:
            return entry
    return None


def exact_paths(yard: Path, resolved_keys: Sequence[str], suffix: str) -> list[Path]:
    """Concrete `<yard>/<resolved_key><suffix>` paths that exist, in key order."""
    paths = []
    for key in resolved_keys:
        path = yard / f"{key}{suffix}"
        if path.exists() and path not in paths:
            paths.append(path)
    return paths
