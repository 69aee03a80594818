"""Checksum resolution for templated cache keys.

A key template may reference files with placeholders of the form
``#(path/to/file)``. Resolving the key replaces each placeholder with the
SHA-1 of that file's contents, so the key changes whenever the file does:

    myproj-#(Gemfile.lock)  ->  myproj-3f786850e387550fdab836ed7e6dc881de23001b

Placeholder rules:
- A placeholder runs from ``#(`` to the first ``)`` after it. Parentheses do
  not nest; a ``(`` inside the span is part of the path.
- The inner text is whitespace-trimmed and treated as a filesystem path.
- A path that is missing, is not a regular file, or cannot be read
  resolves to the empty string.
- An unterminated ``#(`` is kept literally, as is all text outside spans.
"""

import hashlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from scrapyard.consts import HASH_CHUNK_SIZE, PLACEHOLDER_END, PLACEHOLDER_START

logger = logging.getLogger(__name__)

FileHasher = Callable[[Path], str | None]


@dataclass(frozen=True)
class Placeholder:
    """A ``#(...)`` span found in a key template."""

    start: int  # Index of '#'
    end: int  # Index just past ')'
    inner: str

    @property
    def path(self) -> Path:
        return Path(self.inner.strip())


def file_checksum(path: Path) -> str | None:
    """Return the lowercase SHA-1 hex digest of a file's raw bytes.

    Returns None if the file does not exist, is not a regular file, or
    cannot be read.
    """
    digest = hashlib.sha1()
    try:
        if not path.is_file():
            return None
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        logger.debug(f"Unable to read {path}: {e}")
        return None
    return digest.hexdigest()


def scan_placeholders(template: str) -> list[Placeholder]:
    """Find every placeholder span in a template, left to right."""
    placeholders: list[Placeholder] = []
    cursor = 0

    while True:
        start = template.find(PLACEHOLDER_START, cursor)
        if start == -1:
            break

        inner_start = start + len(PLACEHOLDER_START)
        close = template.find(PLACEHOLDER_END, inner_start)
        if close == -1:
            # Unterminated, the rest of the template is literal
            break

        end = close + len(PLACEHOLDER_END)
        placeholders.append(Placeholder(start=start, end=end, inner=template[inner_start:close]))
        cursor = end

    return placeholders


def resolve(
    template: str,
    hasher: FileHasher = file_checksum,
    log: logging.Logger | None = None,
) -> str:
    """Expand every placeholder in a template into a file checksum.

    Args:
        template: Key template, e.g. "myproj-#(Gemfile.lock)".
        hasher: Maps a path to its digest, or None when the file is unusable.
        log: Logger for hashed/skipped trace lines (defaults to this module's).

    Returns:
        The resolved key. Never raises for missing or unreadable files.
    """
    log = log or logger
    pieces: list[str] = []
    cursor = 0

    for placeholder in scan_placeholders(template):
        pieces.append(template[cursor : placeholder.start])
        path = placeholder.path
        digest = hasher(path) if placeholder.inner.strip() else None
        if digest is None:
            log.debug(f"File {path} does not exist, ignoring checksum")
            digest = ""
        else:
            log.debug(f"Including sha1 of {path}")
        pieces.append(digest)
        cursor = placeholder.end

    pieces.append(template[cursor:])
    return "".join(pieces)


class Key:
    """A key template whose resolved value is computed once and cached."""

    def __init__(self, template: str, hasher: FileHasher = file_checksum):
        self.template = template
        self.hasher = hasher
        self._resolved: str | None = None

    def resolve(self, log: logging.Logger | None = None) -> str:
        """Resolve the template, reusing the first result on later calls."""
        if self._resolved is None:
            self._resolved = resolve(self.template, self.hasher, log)
        return self._resolved

    def __str__(self) -> str:
        return self.resolve()

    def __repr__(self) -> str:
        return f"Key({self.template!r})"


def resolve_keys(
    templates: list[str],
    hasher: FileHasher = file_checksum,
    log: logging.Logger | None = None,
) -> list[str]:
    """Resolve each template independently, preserving order."""
    return [Key(template, hasher).resolve(log) for template in templates]


def main() -> None:
    """Example usage of key resolution."""
    import tempfile

    logging.basicConfig(level=logging.DEBUG)

    with tempfile.TemporaryDirectory() as tmpdir:
        lockfile = Path(tmpdir) / "Gemfile.lock"
        lockfile.write_text("rake (13.0.6)\n")

        print("=== Key Resolution Example ===\n")
        for template in [
            f"myproj-#({lockfile})",
            f"myproj-#( {lockfile} )-v2",
            "myproj-#(missing.lock)",
            "myproj-#(unterminated",
        ]:
            print(f"{template!r:60} -> {resolve(template)!r}")


if __name__ == "__main__":
    main()
