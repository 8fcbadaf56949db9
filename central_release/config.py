"""Loading :class:`CentralConfig` from properties/YAML files, secrets and overrides."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .schemas.config import CentralConfig
from .secrets import CREDENTIALS, CredentialResolver

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "mavenCentral."

# Gradle property name (without prefix) -> CentralConfig field.
PROPERTY_FIELDS: Dict[str, str] = {
    "apiBaseUrl": "api_base_url",
    "userToken": "user_token",
    "username": "username",
    "password": "password",
    "publishingType": "publishing_type",
    "deploymentName": "deployment_name",
    "groupId": "group_id",
    "artifactId": "artifact_id",
    "version": "version",
    "packaging": "packaging",
    "signing.enabled": "signing_enabled",
    "signing.keyId": "signing_key_id",
    "localRepository": "local_repository",
    "buildDir": "build_dir",
    "localPublishCommand": "local_publish_command",
    "transport": "transport",
}

_PATH_FIELDS = ("local_repository", "build_dir")

_PROPERTY_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_UNICODE_ESCAPE = re.compile(r"[0-9A-Fa-f]{4}")


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars as their literal text.

    ``version: 1.10`` must stay ``"1.10"``, not become the float ``1.1``.
    """


_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")
_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_properties(text: str) -> Dict[str, str]:
    r"""Parse Java ``.properties`` content.

    Handles ``=``/``:``/whitespace separators, ``#``/``!`` comments, lines
    continued by an odd number of trailing backslashes, and the escapes
    ``\t \n \r \f \uXXXX`` plus escaped literal characters (``\:``, ``\=``, ``\\``).
    """

    properties: Dict[str, str] = {}
    pending = ""
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        if _trailing_backslashes(line) % 2 == 1:
            pending += line[:-1]
            continue
        key, value = _split_property(pending + line)
        pending = ""
        if key:
            properties[key] = value
    if pending:
        key, value = _split_property(pending)
        if key:
            properties[key] = value
    return properties


def _trailing_backslashes(text: str) -> int:
    return len(text) - len(text.rstrip("\\"))


def _split_property(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=:" or char.isspace():
            break
        index += 1
    key, rest = line[:index], line[index:]
    if rest[:1].isspace():
        rest = rest.lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:]
    else:
        rest = rest[1:]
    return _unescape(key), _unescape(_strip_unescaped_tail(rest.lstrip()))


def _strip_unescaped_tail(raw: str) -> str:
    stripped = raw.rstrip()
    if len(stripped) < len(raw) and _trailing_backslashes(stripped) % 2 == 1:
        # The backslash escapes the first trailing whitespace character.
        return raw[: len(stripped) + 1]
    return stripped


def _unescape(text: str) -> str:
    chars: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\":
            chars.append(char)
            index += 1
            continue
        if index + 1 == len(text):
            break
        escaped = text[index + 1]
        if escaped == "u" and _UNICODE_ESCAPE.fullmatch(text[index + 2 : index + 6]):
            chars.append(chr(int(text[index + 2 : index + 6], 16)))
            index += 6
            continue
        chars.append(_PROPERTY_ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(chars)


def properties_to_fields(properties: Mapping[str, str]) -> Dict[str, Any]:
    """Map ``mavenCentral.*`` (or bare field-name) keys onto config fields; unknown keys are ignored."""

    fields: Dict[str, Any] = {}
    known_fields = set(PROPERTY_FIELDS.values())
    for key, value in properties.items():
        name = key[len(PROPERTY_PREFIX) :] if key.startswith(PROPERTY_PREFIX) else key
        if name in PROPERTY_FIELDS:
            fields[PROPERTY_FIELDS[name]] = value
        elif name in known_fields:
            fields[name] = value
    return fields


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read raw config fields from a ``.properties`` or YAML file."""

    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yml", ".yaml"):
        try:
            loaded = yaml.load(text, Loader=_ConfigLoader) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML config at {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"YAML config at {path} must be a mapping")
        return properties_to_fields({str(key): value for key, value in loaded.items()})
    return properties_to_fields(parse_properties(text))


def load_config(
    path: Optional[Path] = None,
    *,
    workspace_root: Optional[Path] = None,
    overrides: Optional[Mapping[str, str]] = None,
    credentials: Optional[CredentialResolver] = None,
) -> CentralConfig:
    """Build the run configuration: file < environment/``.env`` credentials < overrides."""

    workspace = (workspace_root or Path.cwd()).resolve()
    fields: Dict[str, Any] = {}
    if path is not None:
        fields.update(read_config_file(path))
        logger.debug("Loaded %d config field(s) from %s", len(fields), path)

    resolver = credentials or CredentialResolver()
    for credential in CREDENTIALS:
        if fields.get(credential.config_field):
            continue
        value = resolver.resolve(credential.name)
        if value:
            fields[credential.config_field] = value

    if overrides:
        fields.update(properties_to_fields(overrides))

    for field_name in _PATH_FIELDS:
        if fields.get(field_name):
            candidate = Path(str(fields[field_name])).expanduser()
            fields[field_name] = candidate if candidate.is_absolute() else workspace / candidate
        else:
            fields.pop(field_name, None)
    fields.setdefault("build_dir", workspace / "build")

    try:
        return CentralConfig.model_validate(fields)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def parse_overrides(values: Optional[list[str]]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for entry in values or []:
        if "=" not in entry:
            raise ConfigurationError(f"Property override must be key=value (got '{entry}')")
        key, raw_value = entry.split("=", 1)
        overrides[key.strip()] = raw_value.strip()
    return overrides
