"""Upload and deployment control against the Central Portal."""

from .client import CentralPortalClient, build_auth_header
from .controller import DeploymentController, format_json
from .models import DeploymentActionResult, StatusReport, UploadResult
from .state import DeploymentStateStore
from .transport import CurlTransport, RequestsTransport, TransportRequest, TransportResult
from .uploader import BundleUploader

__all__ = [
    "BundleUploader",
    "CentralPortalClient",
    "CurlTransport",
    "DeploymentActionResult",
    "DeploymentController",
    "DeploymentStateStore",
    "RequestsTransport",
    "StatusReport",
    "TransportRequest",
    "TransportResult",
    "UploadResult",
    "build_auth_header",
    "format_json",
]
