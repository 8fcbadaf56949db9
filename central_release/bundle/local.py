"""Run the build tool's publish-to-local-repository command."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from ..errors import LocalPublishError

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class LocalPublisher:
    """Blocking wrapper around the external local publish command."""

    def __init__(self, command: str, *, cwd: Optional[Path] = None, runner: Optional[Runner] = None) -> None:
        self.command = command
        self.cwd = cwd
        self.runner = runner or subprocess.run

    def run(self) -> List[str]:
        logger.info("Publishing artifacts to the local repository: %s", self.command)
        proc = self.runner(
            shlex.split(self.command),
            cwd=str(self.cwd) if self.cwd else None,
            capture_output=True,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            raise LocalPublishError(self.command, proc.returncode, (proc.stderr or "").strip())
        logs = [f"Executed local publish command: {self.command}"]
        if proc.stdout:
            logs.append(proc.stdout.strip())
        return logs
