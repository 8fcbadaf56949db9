from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

import pytest

from central_release.cli import release as release_cli
from central_release.publish.transport import TransportResult

from .helpers import FakeTransport


def _write_workspace(tmp_path: Path) -> Path:
    repository = tmp_path / "m2"
    artifact_dir = repository / "com" / "example" / "widget" / "1.0.0"
    artifact_dir.mkdir(parents=True)
    for name in ("widget-1.0.0.pom", "widget-1.0.0.aar", "widget-1.0.0.module"):
        (artifact_dir / name).write_text(name, encoding="utf-8")
    (tmp_path / "gradle.properties").write_text(
        "\n".join(
            [
                "mavenCentral.groupId=com.example",
                "mavenCentral.artifactId=widget",
                "mavenCentral.version=1.0.0",
                f"mavenCentral.localRepository={repository}",
                "mavenCentral.userToken=cli-token",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return tmp_path


def _run_cli(argv: list[str]) -> tuple[int, str]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        code = release_cli.main(argv)
    return code, buffer.getvalue()


def test_cli_bundle_command(tmp_path: Path) -> None:
    workspace = _write_workspace(tmp_path)

    code, output = _run_cli(["bundle", "--workspace-root", str(workspace)])

    assert code == 0
    payload = json.loads(output)
    archive_path = Path(payload["archive"]["archive_path"])
    assert archive_path == workspace.resolve() / "build" / "central-bundle" / "central-bundle.zip"
    assert archive_path.exists()
    assert payload["archive"]["repository_path"] == "com/example/widget/1.0.0"
    assert len(payload["prepared"]["files"]) == 3


def test_cli_upload_and_status(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    workspace = _write_workspace(tmp_path)
    transport = FakeTransport(
        TransportResult(returncode=0, stdout="dep-77"),
        TransportResult(returncode=0, stdout='{"deploymentState":"VALIDATED"}'),
    )
    monkeypatch.setattr("central_release.publish.client.build_transport", lambda kind: transport)

    code, _ = _run_cli(["bundle", "--workspace-root", str(workspace)])
    assert code == 0
    code, output = _run_cli(["upload", "--workspace-root", str(workspace)])
    assert code == 0
    assert json.loads(output)["deployment_id"] == "dep-77"

    code, output = _run_cli(["status", "--workspace-root", str(workspace)])
    assert code == 0
    assert '{"deploymentState":"VALIDATED"}' in output
    assert '"deploymentState": "VALIDATED"' in output
    assert transport.requests[1].url.endswith("/status?id=dep-77")
    assert transport.requests[1].headers["Authorization"] == "Bearer cli-token"


def test_cli_release_with_explicit_id_and_property_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    workspace = _write_workspace(tmp_path)
    transport = FakeTransport(TransportResult(returncode=0, stdout=""))
    monkeypatch.setattr("central_release.publish.client.build_transport", lambda kind: transport)

    code, output = _run_cli(
        [
            "release",
            "--workspace-root",
            str(workspace),
            "--deployment-id",
            "explicit-id",
            "-P",
            "mavenCentral.apiBaseUrl=https://portal.invalid/api",
        ]
    )

    assert code == 0
    assert json.loads(output)["deployment_id"] == "explicit-id"
    assert transport.requests[0].url == "https://portal.invalid/api/deployment/explicit-id"


def test_cli_reports_errors_with_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    workspace = _write_workspace(tmp_path)

    code = release_cli.main(["drop", "--workspace-root", str(workspace)])

    assert code == 1
    assert "No deployment id found" in capsys.readouterr().err


def test_cli_secrets_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAVEN_CENTRAL_USER_TOKEN", "secret-value")

    code, output = _run_cli(["secrets", "--workspace-root", str(tmp_path)])

    assert code == 0
    assert "secret-value" not in output
    entries = {entry["name"]: entry for entry in json.loads(output)["secrets"]}
    assert entries["MAVEN_CENTRAL_USER_TOKEN"]["present"] is True
    assert entries["MAVEN_CENTRAL_PASSWORD"]["present"] is False
