"""The scrapyard: a directory of gzip archives keyed by resolved cache keys.

Directory structure:
    {yard}/
    ├── {resolved_key}.tgz
    ├── {resolved_key}.tgz
    └── .scrapyard-XXXX.tmp    # In-flight dump, renamed into place when done

Operations:
- search: restore the best archive for an ordered list of fallback keys
- dump: archive paths under the first key
- junk: delete the archives of exactly the given keys
- crush: delete everything in the yard older than the maximum age
"""

import logging
import os
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path

from scrapyard.archivers.base import Archiver
from scrapyard.archivers.tar_archiver import TarArchiver
from scrapyard.consts import (
    ARCHIVE_SUFFIX,
    CRUSH_MAX_AGE_DAYS,
    SEARCH_SUFFIX,
    SECONDS_PER_DAY,
    TEMP_PREFIX,
)
from scrapyard.exceptions import ScrapyardError, UsageError, YardError
from scrapyard.keys.resolver import FileHasher, file_checksum, resolve_keys
from scrapyard.models.common import _now
from scrapyard.models.model_yard import OperationResult, Outcome, YardContext
from scrapyard.storage.index import candidate_paths, exact_paths, resolve_globs, select_best
from scrapyard.storage.usage import disk_usage, human_size


class Scrapyard:
    """Content-keyed archive cache rooted at a single directory."""

    def __init__(
        self,
        context: YardContext,
        archiver: Archiver | None = None,
        hasher: FileHasher = file_checksum,
        max_age_days: float = CRUSH_MAX_AGE_DAYS,
    ):
        """Initialize Scrapyard.

        Args:
            context: Yard location and logging sink.
            archiver: Archive backend. Defaults to TarArchiver.
            hasher: File digest function used for key placeholders.
            max_age_days: Age after which crush deletes an entry.
        """
        self.context = context
        self.archiver = archiver or TarArchiver()
        self.hasher = hasher
        self.max_age_days = max_age_days

    @property
    def yard(self) -> Path:
        return self.context.yard

    @property
    def log(self) -> logging.Logger:
        return self.context.log

    def _init_yard(self) -> None:
        """Create the yard with any missing parents."""
        if self.yard.exists():
            self.log.info(f"Scrapyard: {self.yard}")
            return

        self.log.info(f"Scrapyard: {self.yard} (creating)")
        try:
            self.yard.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise YardError(f"Unable to create yard {self.yard}: {e}") from e

    def _resolve(self, keys: Sequence[str]) -> list[str]:
        return resolve_keys(list(keys), self.hasher, self.log)

    def search(
        self,
        keys: Sequence[str],
        paths: Sequence[str] = (),
        cwd: Path | None = None,
    ) -> OperationResult:
        """Restore the best matching archive into `cwd`.

        Args:
            keys: Fallback keys in order of preference.
            paths: Paths expected from the archive, used only for the size report.
            cwd: Directory to extract into. Defaults to the current directory.

        Returns:
            RESTORED, EXTRACT_FAILED, or MISS when no key has an archive.
        """
        self._init_yard()
        self.log.info(f"Searching for {list(keys)}")

        patterns = candidate_paths(self.yard, self._resolve(keys), SEARCH_SUFFIX)
        considering = resolve_globs(patterns)
        self.log.debug(f"Considering: {[str(e.path) for e in considering if e is not None]}")

        cache = select_best(considering)
        if cache is None:
            self.log.debug(f"Unable to find scrap from any of {[p.resolved_key for p in patterns]}")
            return OperationResult(outcome=Outcome.MISS)

        self.log.debug(f"Found scrap in {cache.path}")
        result = self.archiver.extract(cache.path, cwd)
        if not result.success:
            self.log.warning(f"Failed to extract {cache.path}: {result.error}")
            return OperationResult(
                outcome=Outcome.EXTRACT_FAILED, archive=cache.path, error=result.error
            )

        if paths:
            restored = human_size(disk_usage(paths, base=cwd))
            self.log.info(f"Restored: {restored}\t{' '.join(paths)}")
        return OperationResult(outcome=Outcome.RESTORED, archive=cache.path)

    def dump(self, keys: Sequence[str], paths: Sequence[str]) -> OperationResult:
        """Archive `paths` under the first key.

        The archive is written to a temporary file in the yard and renamed over
        the target, so the target path never holds a partial archive. Later
        keys are not written.

        Returns:
            STORED, or CREATE_FAILED when the archiver reports failure.
        """
        if not keys:
            raise UsageError("dump requires at least one key")
        self._init_yard()
        self.log.info(f"Dumping {list(keys)}")

        resolved = self._resolve(keys[:1])
        target = self.yard / f"{resolved[0]}{ARCHIVE_SUFFIX}"

        try:
            fd, temp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".tmp", dir=self.yard)
            os.close(fd)
        except OSError as e:
            raise YardError(f"Unable to create temporary file in {self.yard}: {e}") from e
        temp_path = Path(temp_name)

        try:
            result = self.archiver.create(paths, temp_path)
            if not result.success:
                self.log.warning(f"Failed to create archive for {target.name}: {result.error}")
                return OperationResult(
                    outcome=Outcome.CREATE_FAILED, archive=target, error=result.error
                )

            try:
                os.replace(temp_path, target)
                os.utime(target, None)
            except OSError as e:
                raise YardError(f"Unable to move archive into place at {target}: {e}") from e
        finally:
            temp_path.unlink(missing_ok=True)

        self.log.info(f"Created: {target} ({human_size(target.stat().st_size)})")
        return OperationResult(outcome=Outcome.STORED, archive=target)

    def junk(self, keys: Sequence[str], paths: Sequence[str] = ()) -> OperationResult:
        """Delete the `.tgz` archive of each key. Keys without one are skipped."""
        self._init_yard()
        self.log.info(f"Junking {list(keys)}")

        targets = exact_paths(self.yard, self._resolve(keys), ARCHIVE_SUFFIX)
        self.log.debug(f"Paths: {[str(p) for p in targets]}")

        for path in targets:
            self._delete(path)
        return OperationResult(outcome=Outcome.JUNKED, removed=targets)

    def crush(
        self,
        keys: Sequence[str] = (),
        paths: Sequence[str] = (),
        now: float | None = None,
    ) -> OperationResult:
        """Delete every yard entry last modified before the maximum age.

        Args:
            keys: Ignored; crush applies to the whole yard.
            paths: Ignored.
            now: Reference time in epoch seconds. Defaults to the current time.
        """
        self._init_yard()
        self.log.info("Crushing the yard to scrap!")

        now = _now() if now is None else now
        cutoff = now - self.max_age_days * SECONDS_PER_DAY
        removed: list[Path] = []
        kept: list[Path] = []

        for entry in sorted(self.yard.iterdir()):
            try:
                mtime = entry.lstat().st_mtime
            except FileNotFoundError:
                continue

            if mtime < cutoff:
                self.log.info(f"Crushing: {entry}")
                self._delete(entry)
                removed.append(entry)
            else:
                self.log.debug(f"Keeping: {entry} at {mtime}")
                kept.append(entry)

        return OperationResult(outcome=Outcome.CRUSHED, removed=removed, kept=kept)

    def run(self, command: str, keys: Sequence[str], paths: Sequence[str]) -> OperationResult:
        """Dispatch a command name to its operation."""
        operations = {
            "search": self.search,
            "dump": self.dump,
            "junk": self.junk,
            "crush": self.crush,
        }
        if command not in operations:
            raise ScrapyardError(f"Unrecognized command {command}")
        return operations[command](keys, paths)

    def _delete(self, path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink(missing_ok=True)
        except OSError as e:
            raise YardError(f"Unable to delete {path}: {e}") from e
