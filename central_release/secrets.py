"""Publisher credential lookup.

Credentials may come from the config file, but are usually kept out of it and
looked up here from the process environment, then an optional ``.env`` file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

USER_TOKEN_ENV = "MAVEN_CENTRAL_USER_TOKEN"
USERNAME_ENV = "MAVEN_CENTRAL_USERNAME"
PASSWORD_ENV = "MAVEN_CENTRAL_PASSWORD"


@dataclass(frozen=True, slots=True)
class Credential:
    name: str
    config_field: str
    description: str


CREDENTIALS = (
    Credential(USER_TOKEN_ENV, "user_token", "Portal user token."),
    Credential(USERNAME_ENV, "username", "Portal token username."),
    Credential(PASSWORD_ENV, "password", "Portal token password."),
)


@dataclass(slots=True)
class CredentialLookup:
    name: str
    value: Optional[str] = None
    source: Optional[str] = None
    attempts: List[Dict[str, object]] = field(default_factory=list)

    @property
    def present(self) -> bool:
        return self.value is not None


class CredentialResolver:
    """Look credentials up in ``environ`` first, then in ``env_file`` if one is given.

    The ``.env`` file is read once and never copied into ``os.environ``.
    """

    def __init__(self, env_file: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> None:
        self.env_file = env_file
        self.environ = os.environ if environ is None else environ
        self.warnings: List[str] = []
        self._file_values: Optional[Dict[str, str]] = None

    def lookup(self, name: str) -> CredentialLookup:
        lookup = CredentialLookup(name=name)

        value = self.environ.get(name) or None
        lookup.attempts.append({"source": "env", "success": value is not None})
        if value is not None:
            lookup.value, lookup.source = value, "env"
            return lookup

        if self.env_file is not None:
            value = self._dotenv().get(name) or None
            lookup.attempts.append(
                {
                    "source": "dotenv",
                    "success": value is not None,
                    "path": str(self.env_file),
                    "exists": self.env_file.exists(),
                    "warnings": list(self.warnings),
                }
            )
            if value is not None:
                lookup.value, lookup.source = value, "dotenv"
        return lookup

    def resolve(self, name: str) -> Optional[str]:
        return self.lookup(name).value

    def describe(self, credential: Credential) -> Dict[str, object]:
        """Report where a credential was (or was not) found, never its value."""

        lookup = self.lookup(credential.name)
        return {
            "name": credential.name,
            "description": credential.description,
            "config_field": credential.config_field,
            "present": lookup.present,
            "source": lookup.source,
            "attempts": lookup.attempts,
        }

    def describe_all(self) -> List[Dict[str, object]]:
        return [self.describe(credential) for credential in CREDENTIALS]

    def _dotenv(self) -> Dict[str, str]:
        if self._file_values is None:
            self._file_values = {}
            if self.env_file is not None and self.env_file.exists():
                for key, value in dotenv_values(self.env_file).items():
                    if value is None:
                        self.warnings.append(f"{key}: expected KEY=value")
                        continue
                    self._file_values[key] = value
        return self._file_values
