"""Stage the current version's artifacts with checksum side-cars."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import List, Mapping, Optional

from ..errors import PreconditionError
from ..schemas.config import ArtifactCoordinate, CentralConfig
from .models import PreparedBundle, StagedFile
from .utils import CHECKSUM_ALGORITHMS, DigestFunction, is_checksum_file, is_signature_file, write_checksums

logger = logging.getLogger(__name__)


def artifact_name_pattern(coordinate: ArtifactCoordinate) -> re.Pattern[str]:
    """Match ``<artifactId>-<version>[-<classifier>].<ext>`` for exactly this version.

    Classifiers and extensions must start with a letter, so ``foo-1.0.1.pom``
    and ``foo-1.0-1.pom`` never match version ``1.0``. Classifiers may contain
    hyphens after that (``foo-1.0-test-fixtures.jar``).
    """

    return re.compile(
        rf"^{re.escape(coordinate.base_name)}"
        r"(?:-(?P<classifier>[A-Za-z][A-Za-z0-9_]*(?:-[A-Za-z0-9_]+)*))?"
        r"\.(?P<extension>[A-Za-z][A-Za-z0-9]*(?:\.[A-Za-z][A-Za-z0-9]*)*)$"
    )


def is_current_version_file(name: str, coordinate: ArtifactCoordinate) -> bool:
    module_name = f"{coordinate.base_name}.module"
    if name in (module_name, f"{module_name}.asc"):
        return True
    return artifact_name_pattern(coordinate).match(name) is not None


class BundlePreparer:
    """Copies matching artifacts from the local repository into a clean staging directory."""

    def __init__(
        self,
        config: CentralConfig,
        *,
        checksums: Optional[Mapping[str, DigestFunction]] = None,
    ) -> None:
        self.config = config
        self.checksums = dict(checksums or CHECKSUM_ALGORITHMS)

    @property
    def source_dir(self) -> Path:
        return self.config.local_repository / self.config.coordinate.repository_path

    def required_files(self) -> List[str]:
        base = self.config.coordinate.base_name
        return [f"{base}.pom", f"{base}.{self.config.packaging}", f"{base}.module"]

    def prepare(self) -> PreparedBundle:
        coordinate = self.config.coordinate
        source_dir = self.source_dir
        if not source_dir.is_dir():
            raise PreconditionError(
                f"Artifacts not found in local repository: {source_dir}\n"
                f"Run first: {self.config.local_publish_hint}"
            )

        staging_dir = self.config.staging_dir
        if staging_dir.exists():
            shutil.rmtree(staging_dir)
        staging_dir.mkdir(parents=True)

        bundle = PreparedBundle(coordinate=coordinate, staging_dir=staging_dir)
        for source in sorted(source_dir.iterdir()):
            name = source.name
            if not source.is_file() or not is_current_version_file(name, coordinate):
                continue
            if is_checksum_file(name):
                continue
            target = staging_dir / name
            if is_signature_file(name):
                shutil.copyfile(source, target)
                bundle.files.append(StagedFile(name=name, path=target))
                continue
            data = source.read_bytes()
            target.write_bytes(data)
            digests = write_checksums(target, data, self.checksums)
            bundle.files.append(StagedFile(name=name, path=target, checksums=digests))

        missing = [name for name in self.required_files() if not (staging_dir / name).exists()]
        if missing:
            raise PreconditionError(
                f"Missing required files: {', '.join(missing)}\n"
                f"Make sure this has been run: {self.config.local_publish_hint}"
            )

        self._check_signatures(bundle)
        logger.info(
            "Staged %d file(s) for %s (version %s only) in %s",
            len(bundle.files),
            coordinate,
            coordinate.version,
            staging_dir,
        )
        return bundle

    def _check_signatures(self, bundle: PreparedBundle) -> None:
        if not self.config.signing_enabled:
            logger.warning(
                "Signing is disabled; Maven Central requires signatures (set mavenCentral.signing.enabled=true)."
            )
        elif not self.config.signing_key_id:
            logger.warning(
                "No signing key configured; Maven Central requires signatures (set mavenCentral.signing.keyId)."
            )
        elif not any(staged.is_signature for staged in bundle.files):
            logger.warning("Signing is enabled but no .asc signature files were staged from %s.", self.source_dir)
