from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

from central_release.schemas.config import CentralConfig
from central_release.secrets import CREDENTIALS


@pytest.fixture(autouse=True)
def _isolate_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for credential in CREDENTIALS:
        monkeypatch.delenv(credential.name, raising=False)


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., CentralConfig]:
    def _make(**overrides: object) -> CentralConfig:
        payload: Dict[str, object] = {
            "group_id": "io.github.example",
            "artifact_id": "mylib",
            "version": "2.0",
            "user_token": "token-123",
            "local_repository": tmp_path / "m2" / "repository",
            "build_dir": tmp_path / "build",
        }
        payload.update(overrides)
        return CentralConfig.model_validate(payload)

    return _make
