from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from central_release.publish.transport import TransportRequest, TransportResult
from central_release.schemas.config import CentralConfig


class FakeTransport:
    """Records requests and replays canned results in order."""

    def __init__(self, *results: TransportResult) -> None:
        self.results: List[TransportResult] = list(results)
        self.requests: List[TransportRequest] = []

    def send(self, request: TransportRequest) -> TransportResult:
        self.requests.append(request)
        if self.results:
            return self.results.pop(0)
        return TransportResult(returncode=0)


def populate_repository(config: CentralConfig, files: Dict[str, bytes], *, version_dir: Optional[str] = None) -> Path:
    """Write artifact files into the coordinate's local repository directory."""

    directory = config.local_repository / config.coordinate.repository_path
    if version_dir is not None:
        directory = directory.parent / version_dir
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_bytes(content)
    return directory


def standard_artifacts(base: str = "mylib-2.0") -> Dict[str, bytes]:
    return {
        f"{base}.pom": b"<project/>",
        f"{base}.aar": b"aar-bytes",
        f"{base}.module": b'{"formatVersion": "1.1"}',
    }
