"""Key templates and checksum resolution."""

from scrapyard.keys.resolver import (
    FileHasher,
    Key,
    Placeholder,
    file_checksum,
    resolve,
    resolve_keys,
    scan_placeholders,
)

__all__ = [
    "FileHasher",
    "Key",
    "Placeholder",
    "file_checksum",
    "resolve",
    "resolve_keys",
    "scan_placeholders",
]
