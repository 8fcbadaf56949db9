from __future__ import annotations

import base64
from pathlib import Path

import pytest

from central_release.errors import ConfigurationError, PreconditionError, UploadError
from central_release.publish.client import CentralPortalClient, build_auth_header
from central_release.publish.transport import TransportResult
from central_release.publish.uploader import BundleUploader

from .helpers import FakeTransport


def _write_bundle(config) -> Path:
    config.bundle_path.parent.mkdir(parents=True, exist_ok=True)
    config.bundle_path.write_bytes(b"zip")
    return config.bundle_path


def _uploader(config, transport: FakeTransport) -> BundleUploader:
    return BundleUploader(config, client=CentralPortalClient(config, transport=transport))


def test_auth_header_prefers_user_token(make_config) -> None:
    config = make_config(user_token="tok", username="user", password="pass")
    assert build_auth_header(config) == "Bearer tok"


def test_auth_header_from_username_password(make_config) -> None:
    config = make_config(user_token=None, username="user", password="pass")
    expected = base64.b64encode(b"user:pass").decode("ascii")
    assert build_auth_header(config) == f"Bearer {expected}"


def test_missing_auth_fails_before_any_call(make_config) -> None:
    config = make_config(user_token=None, username="user")
    transport = FakeTransport()

    with pytest.raises(ConfigurationError) as excinfo:
        _uploader(config, transport).upload()

    assert "mavenCentral.userToken" in str(excinfo.value)
    assert transport.requests == []


def test_upload_persists_trimmed_deployment_id(make_config) -> None:
    config = make_config(deployment_name="mylib 2.0")
    bundle = _write_bundle(config)
    transport = FakeTransport(TransportResult(returncode=0, stdout="  28570f16-da32-4c14-bd2e-c1acc0782365\n"))

    result = _uploader(config, transport).upload()

    assert result.deployment_id == "28570f16-da32-4c14-bd2e-c1acc0782365"
    assert config.deployment_id_path.read_text(encoding="utf-8") == result.deployment_id
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url == "https://central.sonatype.com/api/v1/publisher/upload"
    assert request.headers == {"Authorization": "Bearer token-123"}
    assert request.fields == {"publishingType": "USER_MANAGED", "name": "mylib 2.0"}
    assert request.files == {"bundle": bundle}


def test_upload_omits_name_when_not_configured(make_config) -> None:
    config = make_config(publishing_type="AUTOMATIC")
    _write_bundle(config)
    transport = FakeTransport(TransportResult(returncode=0, stdout="dep-1"))

    _uploader(config, transport).upload()

    assert transport.requests[0].fields == {"publishingType": "AUTOMATIC"}


def test_upload_overwrites_previous_deployment_id(make_config) -> None:
    config = make_config()
    _write_bundle(config)
    config.deployment_id_path.write_text("old-id", encoding="utf-8")
    transport = FakeTransport(TransportResult(returncode=0, stdout="new-id"))

    _uploader(config, transport).upload()

    assert config.deployment_id_path.read_text(encoding="utf-8") == "new-id"


def test_upload_failure_carries_stderr_and_writes_no_state(make_config) -> None:
    config = make_config()
    _write_bundle(config)
    transport = FakeTransport(TransportResult(returncode=1, stderr="401 unauthorized"))

    with pytest.raises(UploadError) as excinfo:
        _uploader(config, transport).upload()

    assert "401 unauthorized" in str(excinfo.value)
    assert excinfo.value.returncode == 1
    assert not config.deployment_id_path.exists()


def test_upload_rejects_empty_deployment_id(make_config) -> None:
    config = make_config()
    _write_bundle(config)
    transport = FakeTransport(TransportResult(returncode=0, stdout="  \n"))

    with pytest.raises(UploadError):
        _uploader(config, transport).upload()

    assert not config.deployment_id_path.exists()


def test_upload_requires_bundle(make_config) -> None:
    config = make_config()
    transport = FakeTransport()

    with pytest.raises(PreconditionError):
        _uploader(config, transport).upload()

    assert transport.requests == []
