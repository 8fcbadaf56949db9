"""Upload the bundle and remember the deployment id."""

from __future__ import annotations

import logging
from typing import Optional

from ..bundle.models import BundleArchive
from ..errors import PreconditionError, UploadError
from ..schemas.config import CentralConfig
from .client import CentralPortalClient, build_auth_header
from .models import UploadResult
from .state import DeploymentStateStore

logger = logging.getLogger(__name__)


class BundleUploader:
    def __init__(
        self,
        config: CentralConfig,
        *,
        client: Optional[CentralPortalClient] = None,
        state: Optional[DeploymentStateStore] = None,
    ) -> None:
        self.config = config
        self.client = client or CentralPortalClient(config)
        self.state = state or DeploymentStateStore(config.deployment_id_path)

    def upload(self, archive: Optional[BundleArchive] = None) -> UploadResult:
        # Credentials are checked before touching the archive or the network.
        build_auth_header(self.config)

        bundle_path = archive.path if archive else self.config.bundle_path
        if not bundle_path.is_file():
            raise PreconditionError(f"Bundle not found: {bundle_path}\nRun the bundle step first.")

        upload_url = f"{self.config.api_base_url}/upload"
        logger.info("Uploading %s to %s (%s)", bundle_path, upload_url, self.config.publishing_type.value)
        response = self.client.upload(bundle_path)

        deployment_id = response.strip()
        if not deployment_id:
            raise UploadError("Upload", 0, "", message="Upload returned an empty deployment id")

        state_path = self.state.save(deployment_id)
        return UploadResult(
            deployment_id=deployment_id,
            archive_path=bundle_path,
            state_path=state_path,
            logs=[
                f"Uploaded bundle to {upload_url}",
                f"Deployment id: {deployment_id}",
                f"Deployment id saved to {state_path}",
            ],
            next_steps=[
                "central-release status",
                f"central-release status --deployment-id {deployment_id}",
            ],
        )
