"""Version management module."""

from .manager import VersionManager
from .download_manager import DownloadManager
from .catalog import RemoteCatalog
from .models import VersionDescriptor, OperationResult

__all__ = ["VersionManager", "DownloadManager", "RemoteCatalog", "VersionDescriptor", "OperationResult"]
