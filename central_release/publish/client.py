"""Thin client for the Central Portal publisher API."""

from __future__ import annotations

import base64
from urllib.parse import quote
from pathlib import Path
from typing import Dict, Optional

from ..errors import ConfigurationError, TransportError, UploadError
from ..schemas.config import CentralConfig
from .transport import HttpTransport, TransportRequest, TransportResult, build_transport


def build_auth_header(config: CentralConfig) -> str:
    """Return ``Bearer <token>`` from the user token or ``base64(username:password)``."""

    if config.user_token:
        token = config.user_token
    elif config.username and config.password:
        token = base64.b64encode(f"{config.username}:{config.password}".encode("utf-8")).decode("ascii")
    else:
        raise ConfigurationError(
            "Publisher credentials are not configured. Set mavenCentral.userToken or "
            "mavenCentral.username/mavenCentral.password (or MAVEN_CENTRAL_USER_TOKEN, "
            "MAVEN_CENTRAL_USERNAME/MAVEN_CENTRAL_PASSWORD)."
        )
    return f"Bearer {token}"


def _quote_id(deployment_id: str) -> str:
    return quote(deployment_id, safe="")


class CentralPortalClient:
    """One method per publisher endpoint; each returns the raw response body."""

    def __init__(self, config: CentralConfig, transport: Optional[HttpTransport] = None) -> None:
        self.config = config
        self.transport = transport or build_transport(config.transport)

    def upload(self, bundle: Path) -> str:
        fields = {"publishingType": self.config.publishing_type.value}
        if self.config.deployment_name is not None:
            fields["name"] = self.config.deployment_name
        request = TransportRequest(
            method="POST",
            url=f"{self.config.api_base_url}/upload",
            headers=self._headers(),
            fields=fields,
            files={"bundle": bundle},
        )
        return self._send("Upload", request, error=UploadError)

    def status(self, deployment_id: str) -> str:
        request = TransportRequest(
            method="POST",
            url=f"{self.config.api_base_url}/status?id={_quote_id(deployment_id)}",
            headers=self._headers(Accept="application/json"),
        )
        return self._send("Status check", request)

    def publish(self, deployment_id: str) -> str:
        request = TransportRequest(
            method="POST",
            url=f"{self.config.api_base_url}/deployment/{_quote_id(deployment_id)}",
            headers=self._headers(),
        )
        return self._send("Publish", request)

    def drop(self, deployment_id: str) -> str:
        request = TransportRequest(
            method="DELETE",
            url=f"{self.config.api_base_url}/deployment/{_quote_id(deployment_id)}",
            headers=self._headers(),
        )
        return self._send("Drop", request)

    def _headers(self, **extra: str) -> Dict[str, str]:
        return {"Authorization": build_auth_header(self.config), **extra}

    def _send(self, operation: str, request: TransportRequest, *, error: type[TransportError] = TransportError) -> str:
        result: TransportResult = self.transport.send(request)
        if not result.ok:
            raise error(operation, result.returncode, result.stderr)
        return result.stdout
