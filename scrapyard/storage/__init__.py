"""Yard storage: archive lookup, selection and eviction.

This module provides:
- Scrapyard: search/dump/junk/crush against a yard directory
- candidate_paths, resolve_globs, select_best, exact_paths: key-to-archive index
- disk_usage, human_size: size reporting
"""

from scrapyard.storage.index import candidate_paths, exact_paths, resolve_globs, select_best
from scrapyard.storage.usage import disk_usage, human_size
from scrapyard.storage.yard import Scrapyard

__all__ = [
    "Scrapyard",
    "candidate_paths",
    "disk_usage",
    "exact_paths",
    "human_size",
    "resolve_globs",
    "select_best",
]
