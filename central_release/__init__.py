"""Maven Central Portal release tooling: stage, bundle, upload and release artifacts."""

__version__ = "0.1.0"
from .bundle import BundleArchive, BundlePackager, BundlePreparer, LocalPublisher, PreparedBundle, StagedFile
from .config import load_config
from .errors import (
    CentralReleaseError,
    ConfigurationError,
    LocalPublishError,
    PreconditionError,
    TransportError,
    UploadError,
)
from .pipeline import PipelineResult, ReleasePipeline
from .publish import BundleUploader, CentralPortalClient, DeploymentController, DeploymentStateStore
from .schemas import ArtifactCoordinate, CentralConfig, PublishingType, TransportKind

__all__ = [
    "__version__",
    "ArtifactCoordinate",
    "BundleArchive",
    "BundlePackager",
    "BundlePreparer",
    "BundleUploader",
    "CentralConfig",
    "CentralPortalClient",
    "CentralReleaseError",
    "ConfigurationError",
    "DeploymentController",
    "DeploymentStateStore",
    "LocalPublishError",
    "LocalPublisher",
    "PipelineResult",
    "PreconditionError",
    "PreparedBundle",
    "PublishingType",
    "ReleasePipeline",
    "StagedFile",
    "TransportError",
    "TransportKind",
    "UploadError",
    "load_config",
]
