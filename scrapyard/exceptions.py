"""Exceptions raised by scrapyard.

Lookup misses and archiver failures are normal outcomes and are reported
through OperationResult instead. Exceptions are reserved for conditions with
no recovery path.
"""


class ScrapyardError(Exception):
    """Base class for scrapyard errors."""


class YardError(ScrapyardError):
    """A filesystem operation against the yard failed (mkdir, rename, delete)."""


class UsageError(ScrapyardError):
    """A command was invoked without the keys or paths it requires."""
