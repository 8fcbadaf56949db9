"""Checksum and file helpers used by bundle tooling."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

DigestFunction = Callable[[bytes], str]


def md5_hex(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


# Side-car extension -> digest. Central requires md5 and sha1 next to every artifact.
CHECKSUM_ALGORITHMS: Mapping[str, DigestFunction] = {
    "md5": md5_hex,
    "sha1": sha1_hex,
}

CHECKSUM_EXTENSIONS = (".md5", ".sha1", ".sha256", ".sha512")
SIGNATURE_EXTENSION = ".asc"


def is_checksum_file(name: str) -> bool:
    return name.endswith(CHECKSUM_EXTENSIONS)


def is_signature_file(name: str) -> bool:
    return name.endswith(SIGNATURE_EXTENSION)


def write_checksums(path: Path, data: bytes, algorithms: Mapping[str, DigestFunction]) -> Dict[str, str]:
    """Write one ``<name>.<algorithm>`` side-car per algorithm and return the digests."""

    digests: Dict[str, str] = {}
    for algorithm, digest in algorithms.items():
        value = digest(data)
        write_text(path.with_name(f"{path.name}.{algorithm}"), value)
        digests[algorithm] = value
    return digests


def write_text(path: Path, content: str, *, newline: Optional[str] = None) -> None:
    """Write text to file ensuring parent directories exist."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline=newline)
