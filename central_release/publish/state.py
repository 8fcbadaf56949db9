"""Persisted deployment identifier shared between upload and later commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..bundle.utils import write_text
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class DeploymentStateStore:
    """Single text file holding the most recent deployment id.

    Writes overwrite without locking; concurrent pipelines sharing one file are unsupported.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        value = self.path.read_text(encoding="utf-8").strip()
        return value or None

    def save(self, deployment_id: str) -> Path:
        write_text(self.path, deployment_id)
        logger.info("Deployment id saved to %s", self.path)
        return self.path

    def resolve(self, explicit: Optional[str] = None) -> str:
        """Explicit id, else the persisted one, else a configuration error."""

        if explicit and explicit.strip():
            return explicit.strip()
        stored = self.load()
        if stored:
            return stored
        raise ConfigurationError(
            f"No deployment id found at {self.path}. Run the upload command first, "
            "or pass --deployment-id <id>."
        )
