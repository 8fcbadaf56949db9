"""Pydantic models describing publisher configuration."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_BASE_URL = "https://central.sonatype.com/api/v1/publisher"
STAGING_DIR_NAME = "central-bundle-temp"
BUNDLE_DIR_NAME = "central-bundle"
BUNDLE_ARCHIVE_NAME = "central-bundle.zip"
DEPLOYMENT_ID_FILE_NAME = "deployment-id.txt"


class PublishingType(str, Enum):
    """Publishing modes accepted by the upload endpoint."""

    USER_MANAGED = "USER_MANAGED"
    AUTOMATIC = "AUTOMATIC"


class TransportKind(str, Enum):
    REQUESTS = "requests"
    CURL = "curl"


class ArtifactCoordinate(BaseModel):
    """(groupId, artifactId, version) identifying one publishable unit."""

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def base_name(self) -> str:
        return f"{self.artifact_id}-{self.version}"

    @property
    def repository_path(self) -> str:
        """Path of the coordinate inside a Maven repository layout."""

        return f"{self.group_id.replace('.', '/')}/{self.artifact_id}/{self.version}"

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class CentralConfig(BaseModel):
    """Configuration for one pipeline run, passed explicitly into every stage."""

    api_base_url: str = DEFAULT_API_BASE_URL
    user_token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    publishing_type: PublishingType = PublishingType.USER_MANAGED
    deployment_name: Optional[str] = None

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    packaging: str = Field(default="aar", description="Extension of the primary binary artifact.")

    signing_enabled: bool = True
    signing_key_id: Optional[str] = None

    local_repository: Path = Field(default_factory=lambda: Path.home() / ".m2" / "repository")
    build_dir: Path = Field(default_factory=lambda: Path("build"))
    local_publish_command: Optional[str] = Field(
        default=None,
        description="Command installing the artifacts into the local repository.",
    )
    transport: TransportKind = TransportKind.REQUESTS

    model_config = ConfigDict(extra="forbid")

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("user_token", "username", "password", "deployment_name", "signing_key_id", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("packaging")
    @classmethod
    def _normalize_packaging(cls, value: str) -> str:
        return value.lstrip(".")

    @property
    def coordinate(self) -> ArtifactCoordinate:
        return ArtifactCoordinate(group_id=self.group_id, artifact_id=self.artifact_id, version=self.version)

    @property
    def staging_dir(self) -> Path:
        return self.build_dir / STAGING_DIR_NAME

    @property
    def bundle_dir(self) -> Path:
        return self.build_dir / BUNDLE_DIR_NAME

    @property
    def bundle_path(self) -> Path:
        return self.bundle_dir / BUNDLE_ARCHIVE_NAME

    @property
    def deployment_id_path(self) -> Path:
        return self.bundle_dir / DEPLOYMENT_ID_FILE_NAME

    @property
    def local_publish_hint(self) -> str:
        return self.local_publish_command or "./gradlew publishToMavenLocal"
