"""Results returned by the publish stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(slots=True)
class UploadResult:
    deployment_id: str
    archive_path: Path
    state_path: Path
    logs: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "deployment_id": self.deployment_id,
            "archive_path": str(self.archive_path),
            "state_path": str(self.state_path),
            "logs": self.logs,
            "next_steps": self.next_steps,
        }


@dataclass(slots=True)
class StatusReport:
    deployment_id: str
    raw: str
    formatted: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {"deployment_id": self.deployment_id, "raw": self.raw, "formatted": self.formatted}


@dataclass(slots=True)
class DeploymentActionResult:
    action: str
    deployment_id: str
    response: str = ""
    logs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "action": self.action,
            "deployment_id": self.deployment_id,
            "response": self.response,
            "logs": self.logs,
        }
