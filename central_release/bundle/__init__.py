"""Bundle preparation and packaging."""

from .local import LocalPublisher
from .models import BundleArchive, PreparedBundle, StagedFile
from .packager import BundlePackager, ZipArchiveWriter
from .preparer import BundlePreparer, is_current_version_file

__all__ = [
    "BundleArchive",
    "BundlePackager",
    "BundlePreparer",
    "LocalPublisher",
    "PreparedBundle",
    "StagedFile",
    "ZipArchiveWriter",
    "is_current_version_file",
]
