"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pytest

from scrapyard.models.model_archive import ArchiveResult
from scrapyard.models.model_yard import YardContext
from scrapyard.storage.yard import Scrapyard

# Fixed reference time for mtime-based tests
NOW = 1_700_000_000.0
DAY = 24 * 60 * 60


class ManifestArchiver:
    """Archiver fake that stores file contents as a JSON manifest.

    Archives are plain JSON so tests can inspect them, and no tar process is
    spawned. Paths are stored as given and restored relative to `cwd`.
    """

    def __init__(self, fail_create: bool = False, fail_extract: bool = False):
        self.fail_create = fail_create
        self.fail_extract = fail_extract
        self.created: list[Path] = []
        self.extracted: list[Path] = []

    def is_tar_installed(self) -> bool:
        return True

    def create(self, paths: Sequence[str | Path], destination: Path) -> ArchiveResult:
        self.created.append(destination)
        if self.fail_create:
            destination.write_text("partial")
            return ArchiveResult(success=False, error="create failed")

        manifest: dict[str, str] = {}
        for raw in paths:
            path = Path(raw)
            files = sorted(p for p in path.rglob("*") if p.is_file()) if path.is_dir() else [path]
            for f in files:
                manifest[str(f)] = f.read_text()
        destination.write_text(json.dumps(manifest))
        return ArchiveResult(success=True)

    def extract(self, archive: Path, cwd: Path | None = None) -> ArchiveResult:
        self.extracted.append(archive)
        if self.fail_extract:
            return ArchiveResult(success=False, error="extract failed")

        base = cwd or Path.cwd()
        for name, content in json.loads(archive.read_text()).items():
            target = base / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return ArchiveResult(success=True)


def set_mtime(path: Path, mtime: float) -> Path:
    """Set both atime and mtime of a path."""
    os.utime(path, (mtime, mtime))
    return path


def make_archive(yard: Path, name: str, mtime: float, files: dict[str, str] | None = None) -> Path:
    """Write a manifest archive straight into the yard."""
    yard.mkdir(parents=True, exist_ok=True)
    path = yard / name
    path.write_text(json.dumps(files or {"marker.txt": name}))
    return set_mtime(path, mtime)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def yard_dir(temp_dir: Path) -> Path:
    """Yard location inside the temporary directory (not created)."""
    return temp_dir / "yard"


@pytest.fixture
def workdir(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory that archives are created from and extracted into."""
    path = temp_dir / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def archiver() -> ManifestArchiver:
    return ManifestArchiver()


@pytest.fixture
def store(yard_dir: Path, archiver: ManifestArchiver) -> Scrapyard:
    """Scrapyard over the temporary yard using the manifest archiver."""
    return Scrapyard(YardContext(yard=yard_dir), archiver=archiver)
