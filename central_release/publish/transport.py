"""HTTP transports for the publisher API.

Both transports report results the way an external process would (exit code,
stdout, stderr) so callers handle ``requests`` and ``curl`` identically.
"""

from __future__ import annotations

import logging
import subprocess
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

import requests
from requests import Session
from requests.exceptions import RequestException

from ..schemas.config import TransportKind

logger = logging.getLogger(__name__)

# Mirrors curl's exit code for HTTP errors under --fail.
HTTP_ERROR_EXIT_CODE = 22


@dataclass(slots=True)
class TransportRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[str, Path] = field(default_factory=dict)


@dataclass(slots=True)
class TransportResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class HttpTransport(Protocol):
    def send(self, request: TransportRequest) -> TransportResult:  # pragma: no cover - interface
        ...


class RequestsTransport:
    """Send requests through a ``requests.Session``; no timeout is applied."""

    name = "requests"

    def __init__(self, session: Optional[Session] = None) -> None:
        self.session = session or requests.Session()

    def send(self, request: TransportRequest) -> TransportResult:
        logger.debug("%s %s", request.method, request.url)
        with ExitStack() as stack:
            files = {
                name: (path.name, stack.enter_context(path.open("rb")), "application/octet-stream")
                for name, path in request.files.items()
            }
            try:
                response = self.session.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    data=request.fields or None,
                    files=files or None,
                )
            except RequestException as exc:
                return TransportResult(returncode=1, stderr=str(exc))

        if response.status_code >= 400:
            return TransportResult(
                returncode=HTTP_ERROR_EXIT_CODE,
                stdout=response.text,
                stderr=f"{response.status_code} {response.reason}: {response.text}".strip(),
            )
        return TransportResult(returncode=0, stdout=response.text)


class CurlTransport:
    """Shell out to ``curl``, as the Gradle tasks this tool replaces did."""

    name = "curl"

    def __init__(
        self,
        executable: str = "curl",
        *,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ) -> None:
        self.executable = executable
        self.runner = runner or subprocess.run

    def build_command(self, request: TransportRequest) -> List[str]:
        command = [self.executable, "--silent", "--show-error", "--fail-with-body", "--request", request.method]
        for key, value in request.headers.items():
            command.extend(["--header", f"{key}: {value}"])
        for name, path in request.files.items():
            command.extend(["--form", f"{name}=@{path}"])
        for name, value in request.fields.items():
            command.extend(["--form-string", f"{name}={value}"])
        command.append(request.url)
        return command

    def send(self, request: TransportRequest) -> TransportResult:
        proc = self.runner(self.build_command(request), capture_output=True, text=True, check=False)
        return TransportResult(returncode=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")


def build_transport(kind: TransportKind | str) -> HttpTransport:
    if TransportKind(kind) is TransportKind.CURL:
        return CurlTransport()
    return RequestsTransport()
