"""Data models produced by the bundle stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..schemas.config import ArtifactCoordinate


@dataclass(slots=True)
class StagedFile:
    name: str
    path: Path
    checksums: Dict[str, str] = field(default_factory=dict)

    @property
    def is_signature(self) -> bool:
        return self.name.endswith(".asc")

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "path": str(self.path), "checksums": dict(self.checksums)}


@dataclass(slots=True)
class PreparedBundle:
    coordinate: ArtifactCoordinate
    staging_dir: Path
    files: List[StagedFile] = field(default_factory=list)

    @property
    def file_names(self) -> List[str]:
        return [staged.name for staged in self.files]

    def to_dict(self) -> Dict[str, object]:
        return {
            "coordinate": str(self.coordinate),
            "staging_dir": str(self.staging_dir),
            "files": [staged.to_dict() for staged in self.files],
        }


@dataclass(slots=True)
class BundleArchive:
    path: Path
    size: int
    repository_path: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "archive_path": str(self.path),
            "size_bytes": self.size,
            "size_kb": self.size // 1024,
            "repository_path": self.repository_path,
        }
