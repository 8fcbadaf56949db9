"""Error types raised by the release pipeline."""

from __future__ import annotations

from typing import Optional


class CentralReleaseError(RuntimeError):
    """Base class for every fatal pipeline failure."""


class PreconditionError(CentralReleaseError):
    """Raised when local inputs required by a stage are missing."""


class ConfigurationError(PreconditionError):
    """Raised when required configuration (auth, deployment id, ...) is absent or invalid."""


class LocalPublishError(CentralReleaseError):
    """Raised when the external local-publish command fails."""

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Local publish command failed (exit {returncode}): {command}\n{stderr}")


class TransportError(CentralReleaseError):
    """Raised when a call to the publisher API exits non-zero."""

    def __init__(self, operation: str, returncode: int, stderr: str, *, message: Optional[str] = None) -> None:
        self.operation = operation
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message or f"{operation} failed: {stderr}")


class UploadError(TransportError):
    """Raised when the bundle upload fails."""


__all__ = [
    "CentralReleaseError",
    "ConfigurationError",
    "LocalPublishError",
    "PreconditionError",
    "TransportError",
    "UploadError",
]
