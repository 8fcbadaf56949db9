"""Schema definitions for publisher configuration."""

from .config import ArtifactCoordinate, CentralConfig, PublishingType, TransportKind

__all__ = [
    "ArtifactCoordinate",
    "CentralConfig",
    "PublishingType",
    "TransportKind",
]
