"""Sequential release pipeline: local publish -> prepare -> package -> upload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .bundle.local import LocalPublisher
from .bundle.models import BundleArchive, PreparedBundle
from .bundle.packager import BundlePackager
from .bundle.preparer import BundlePreparer
from .publish.models import UploadResult
from .publish.uploader import BundleUploader
from .schemas.config import CentralConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    prepared: Optional[PreparedBundle] = None
    archive: Optional[BundleArchive] = None
    upload: Optional[UploadResult] = None
    logs: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "prepared": self.prepared.to_dict() if self.prepared else None,
            "archive": self.archive.to_dict() if self.archive else None,
            "upload": self.upload.to_dict() if self.upload else None,
            "logs": self.logs,
            "next_steps": self.next_steps,
        }


class ReleasePipeline:
    """Runs the stages in order; the first failure propagates and stops the run."""

    def __init__(
        self,
        config: CentralConfig,
        *,
        workspace_root: Optional[Path] = None,
        local_publisher: Optional[LocalPublisher] = None,
        preparer: Optional[BundlePreparer] = None,
        packager: Optional[BundlePackager] = None,
        uploader: Optional[BundleUploader] = None,
        skip_local_publish: bool = False,
    ) -> None:
        self.config = config
        if local_publisher is None and config.local_publish_command and not skip_local_publish:
            local_publisher = LocalPublisher(config.local_publish_command, cwd=workspace_root)
        self.local_publisher = local_publisher
        self.preparer = preparer or BundlePreparer(config)
        self.packager = packager or BundlePackager(config)
        self._uploader = uploader

    @property
    def uploader(self) -> BundleUploader:
        # Built lazily so bundle-only runs never need credentials.
        if self._uploader is None:
            self._uploader = BundleUploader(self.config)
        return self._uploader

    def prepare(self, result: Optional[PipelineResult] = None) -> PipelineResult:
        result = result or PipelineResult()
        if self.local_publisher is not None:
            result.logs.extend(self.local_publisher.run())
        result.prepared = self.preparer.prepare()
        result.logs.append(
            f"Prepared {len(result.prepared.files)} file(s) for version {self.config.version} "
            f"in {result.prepared.staging_dir}"
        )
        return result

    def bundle(self, result: Optional[PipelineResult] = None) -> PipelineResult:
        result = self.prepare(result)
        result.archive = self.packager.package()
        result.logs.append(f"Bundle created: {result.archive.path} ({result.archive.size // 1024} KB)")
        result.logs.append(f"Maven path: {result.archive.repository_path}")
        return result

    def run(self) -> PipelineResult:
        result = self.bundle()
        result.upload = self.uploader.upload(result.archive)
        result.logs.extend(result.upload.logs)
        result.next_steps = [
            "central-release status    # wait for VALIDATED",
            "central-release release   # publish the validated deployment",
            "central-release drop      # or discard it",
        ]
        logger.info("Pipeline finished for %s: deployment %s", self.config.coordinate, result.upload.deployment_id)
        return result
