"""tar CLI wrapper for creating and extracting gzip archives."""

import logging
import shutil
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from scrapyard.consts import TAR_EXECUTABLE
from scrapyard.models.model_archive import ArchiveResult

logger = logging.getLogger(__name__)


class TarArchiver:
    """Wraps the tar CLI. Each call blocks until tar exits."""

    def __init__(
        self,
        tar_path: str = TAR_EXECUTABLE,
        timeout: int | None = None,
    ):
        """Initialize TarArchiver.

        Args:
            tar_path: Path to tar executable (default: "tar")
            timeout: Seconds before tar is killed (default: None, wait forever)
        """
        self.tar_path = tar_path
        self.timeout = timeout

    def is_tar_installed(self) -> bool:
        """Check if tar is installed and accessible.

        Returns:
            True if tar is installed, False otherwise
        """
        return shutil.which(self.tar_path) is not None

    def create(self, paths: Sequence[str | Path], destination: Path) -> ArchiveResult:
        cmd = [self.tar_path, "czf", str(destination), *(str(p) for p in paths)]
        return self._run(cmd)

    def extract(self, archive: Path, cwd: Path | None = None) -> ArchiveResult:
        cmd = [self.tar_path, "zxf", str(archive)]
        return self._run(cmd, cwd=cwd)

    def _run(self, cmd: list[str], cwd: Path | None = None) -> ArchiveResult:
        """Run tar to completion and classify the result."""
        logger.debug(f"Executing [{' '.join(cmd)}]")
        start_time = time.time()

        try:
            process = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return ArchiveResult(
                success=False,
                command=cmd,
                error=f"tar timeout ({self.timeout}s)",
                duration_seconds=time.time() - start_time,
            )
        except OSError as e:
            # Missing executable, bad cwd
            return ArchiveResult(
                success=False,
                command=cmd,
                error=f"Unable to run tar: {e}",
                duration_seconds=time.time() - start_time,
            )

        duration = time.time() - start_time
        if process.returncode != 0:
            error_msg = process.stderr.decode("utf-8", errors="replace").strip()
            logger.debug(f"tar failed (code {process.returncode}): {error_msg}")
            return ArchiveResult(
                success=False,
                command=cmd,
                returncode=process.returncode,
                error=f"tar error (code {process.returncode}): {error_msg[:1000]}",
                duration_seconds=duration,
            )

        return ArchiveResult(
            success=True,
            command=cmd,
            returncode=process.returncode,
            duration_seconds=duration,
        )
