"""Archive the staging directory into the deployable bundle."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable, Protocol, Tuple

from ..errors import PreconditionError
from ..schemas.config import CentralConfig
from .models import BundleArchive

logger = logging.getLogger(__name__)

ArchiveEntry = Tuple[Path, str]


class ArchiveWriter(Protocol):
    def write(self, entries: Iterable[ArchiveEntry], destination: Path) -> None:  # pragma: no cover - interface
        ...


class ZipArchiveWriter:
    """Writes ``(source, arcname)`` entries into a deflated ZIP file."""

    def write(self, entries: Iterable[ArchiveEntry], destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for source, arcname in entries:
                archive.write(source, arcname=arcname)


class BundlePackager:
    """Packs staged files under ``groupId/artifactId/version/`` into ``central-bundle.zip``."""

    def __init__(self, config: CentralConfig, *, writer: ArchiveWriter | None = None) -> None:
        self.config = config
        self.writer = writer or ZipArchiveWriter()

    def package(self) -> BundleArchive:
        staging_dir = self.config.staging_dir
        staged = (
            sorted(
                (path for path in staging_dir.rglob("*") if path.is_file()),
                key=lambda path: path.relative_to(staging_dir).as_posix(),
            )
            if staging_dir.is_dir()
            else []
        )
        if not staged:
            raise PreconditionError(
                f"Staging directory is missing or empty: {staging_dir}\nRun the prepare step first."
            )

        repository_path = self.config.coordinate.repository_path
        entries = [(path, f"{repository_path}/{path.relative_to(staging_dir).as_posix()}") for path in staged]

        archive_path = self.config.bundle_path
        if archive_path.exists():
            archive_path.unlink()
        self.writer.write(entries, archive_path)

        archive = BundleArchive(
            path=archive_path.resolve(),
            size=archive_path.stat().st_size,
            repository_path=repository_path,
        )
        logger.info("Bundle created: %s (%d KB, %s)", archive.path, archive.size // 1024, repository_path)
        return archive
