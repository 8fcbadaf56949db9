"""Status, release and drop operations against an uploaded deployment.

The deployment state machine lives entirely on the Portal
(``uploaded -> validated|failed -> published|dropped``); these calls only
trigger transitions and report whatever the Portal answers.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Optional

from ..schemas.config import CentralConfig
from .client import CentralPortalClient
from .models import DeploymentActionResult, StatusReport
from .state import DeploymentStateStore

logger = logging.getLogger(__name__)

StatusFormatter = Callable[[str], str]


def format_json(raw: str) -> str:
    return json.dumps(json.loads(raw), indent=2, ensure_ascii=False)


class DeploymentController:
    def __init__(
        self,
        config: CentralConfig,
        *,
        client: Optional[CentralPortalClient] = None,
        state: Optional[DeploymentStateStore] = None,
        formatter: Optional[StatusFormatter] = format_json,
    ) -> None:
        self.config = config
        self.client = client or CentralPortalClient(config)
        self.state = state or DeploymentStateStore(config.deployment_id_path)
        self.formatter = formatter

    def status(self, deployment_id: Optional[str] = None) -> StatusReport:
        resolved = self.state.resolve(deployment_id)
        logger.info("Checking deployment status: %s", resolved)
        raw = self.client.status(resolved)
        return StatusReport(deployment_id=resolved, raw=raw, formatted=self._format(raw))

    def release(self, deployment_id: Optional[str] = None) -> DeploymentActionResult:
        resolved = self.state.resolve(deployment_id)
        logger.info("Publishing deployment: %s", resolved)
        response = self.client.publish(resolved)
        return DeploymentActionResult(
            action="release",
            deployment_id=resolved,
            response=response.strip(),
            logs=[
                "Publish requested.",
                "The deployment is being published to Maven Central; check progress with `central-release status`.",
            ],
        )

    def drop(self, deployment_id: Optional[str] = None) -> DeploymentActionResult:
        resolved = self.state.resolve(deployment_id)
        logger.info("Dropping deployment: %s", resolved)
        response = self.client.drop(resolved)
        return DeploymentActionResult(
            action="drop",
            deployment_id=resolved,
            response=response.strip(),
            logs=["Deployment dropped."],
        )

    def _format(self, raw: str) -> Optional[str]:
        if self.formatter is None or not raw.strip():
            return None
        try:
            return self.formatter(raw)
        except Exception as exc:
            # Formatting is best-effort; the raw payload is still reported.
            logger.debug("Skipping status formatting: %s", exc)
            return None
