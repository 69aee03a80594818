"""Archive backends used by the yard."""

from scrapyard.archivers.base import Archiver
from scrapyard.archivers.tar_archiver import TarArchiver

__all__ = [
    "Archiver",
    "TarArchiver",
]
