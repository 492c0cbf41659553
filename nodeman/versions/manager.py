"""Install, switch and remove Node.js versions."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Callable, List, MutableMapping, Optional, Sequence

from ..config import ManagerConfig
from ..errors import ChecksumError, ErrorKind, FilesystemError, NodemanError
from ..runtime.activation import ActivationState
from ..runtime.archive import extract_archive, promote_single_root
from ..runtime.environment import (
    ManagedPathMatcher, PathMatcher, Platform, activate, archive_name,
    binary_dir, detect_platform, download_url,
)
from ..runtime.install_store import InstallStore
from .catalog import RemoteCatalog
from .download_manager import DownloadManager
from .models import OperationResult, VersionDescriptor, normalize_version

logger = logging.getLogger(__name__)


def resolve_lts(descriptors: Sequence[VersionDescriptor]) -> Optional[str]:
    """First LTS release in the given order."""
    for descriptor in descriptors:
        if descriptor.is_lts:
            return descriptor.version
    return None


def parse_shasums(text: str, filename: str) -> Optional[str]:
    for line in text.splitlines():
        parts = line.split()
        if len(parts) == 2 and parts[1].lstrip("*") == filename:
            return parts[0].lower()
    return None


class VersionManager:
    def __init__(self, config: ManagerConfig, platform: Optional[Platform] = None,
                 path_matcher: Optional[PathMatcher] = None,
                 environ: Optional[MutableMapping[str, str]] = None):
        self.config = config
        self.config.ensure_base_dir()
        self.platform = platform or detect_platform()
        self.path_matcher = path_matcher or ManagedPathMatcher(config.base_dir)
        self.environ = environ
        self.catalog = RemoteCatalog(config)
        self.store = InstallStore(config.base_dir)
        self.activation = ActivationState(config.marker_path)

    def list_installed(self) -> List[str]:
        return self.store.list()

    async def list_remote(self) -> List[VersionDescriptor]:
        return await self.catalog.fetch()

    def current(self) -> Optional[str]:
        return self.activation.get()

    async def install(self, version: Optional[str] = None, use_lts: bool = False,
                      progress_callback: Optional[Callable] = None) -> OperationResult:
        """Download and unpack a release into the base directory."""
        if use_lts:
            descriptors = await self.catalog.fetch()
            if not descriptors:
                message = "Could not fetch the release index to resolve the latest LTS release"
                logger.error(message)
                return OperationResult.failure(ErrorKind.LTS_NOT_FOUND, message)
            version = resolve_lts(descriptors)
            if version is None:
                message = "No LTS release found in the release index"
                logger.error(message)
                return OperationResult.failure(ErrorKind.LTS_NOT_FOUND, message)
            logger.info("Latest LTS release is %s", version)
        else:
            resolved = normalize_version(version or "")
            if resolved is None:
                return self._invalid(version)
            version = resolved

        target = self.store.version_dir(version)
        if self.store.exists(version):
            message = f"Node {version} is already installed"
            logger.info(message)
            return OperationResult.success(version, message, error=ErrorKind.ALREADY_INSTALLED)

        name = archive_name(version, self.platform)
        archive_path = self.config.base_dir / name
        url = download_url(self.config.base_url, version, self.platform)
        try:
            target.mkdir(parents=True)
            logger.info("Downloading %s", url)
            async with DownloadManager(self.config.user_agent, self.config.http_timeout) as dm:
                await dm.download_file(url, archive_path, progress_callback)
                if self.config.verify_checksums:
                    await self._verify_checksum(dm, version, archive_path)
            await asyncio.to_thread(extract_archive, archive_path, target)
            await asyncio.to_thread(promote_single_root, target)
            archive_path.unlink()
        except Exception as e:
            # a partial install never survives a failure
            kind = e.kind if isinstance(e, NodemanError) else ErrorKind.FILESYSTEM
            logger.error("Failed to install node %s: %s", version, e)
            self._rollback(target, archive_path)
            return OperationResult.failure(kind, str(e), version)
        finally:
            self.store.refresh()

        message = f"Installed node {version}"
        logger.info(message)
        return OperationResult.success(version, message)

    async def _verify_checksum(self, dm: DownloadManager, version: str, archive_path: Path) -> None:
        shasums_url = f"{self.config.base_url}/v{version}/SHASUMS256.txt"
        expected = parse_shasums(await dm.fetch_text(shasums_url), archive_path.name)
        if expected is None:
            raise ChecksumError(f"No checksum listed for {archive_path.name}")
        actual = await DownloadManager.sha256_file(archive_path)
        if actual != expected:
            raise ChecksumError(f"Checksum mismatch for {archive_path.name}: expected {expected}, got {actual}")

    def _rollback(self, target: Path, archive_path: Path) -> None:
        shutil.rmtree(target, ignore_errors=True)
        if archive_path.exists():
            try:
                archive_path.unlink()
            except OSError as e:
                logger.warning("Could not remove %s: %s", archive_path, e)
        if target.exists():
            logger.error("Rollback incomplete, remove %s manually", target)

    def use(self, version: str) -> OperationResult:
        """Activate an installed version for this process."""
        resolved = normalize_version(version)
        if resolved is None:
            return self._invalid(version)
        if not self.store.exists(resolved):
            message = f"Node {resolved} is not installed, install it first"
            logger.warning(message)
            return OperationResult.failure(ErrorKind.NOT_INSTALLED, message, resolved)

        bin_dir = binary_dir(self.store.version_dir(resolved), self.platform)
        try:
            self.activation.set(resolved)
        except FilesystemError as e:
            logger.error("Could not record active version: %s", e)
            return OperationResult.failure(e.kind, str(e), resolved)
        activate(bin_dir, self.environ, self.path_matcher)

        message = f"Now using node {resolved}"
        logger.info(message)
        return OperationResult.success(resolved, message)

    def uninstall(self, version: str) -> OperationResult:
        """Remove an installed version that is not the active one."""
        resolved = normalize_version(version)
        if resolved is None:
            return self._invalid(version)
        if not self.store.exists(resolved):
            message = f"Node {resolved} is not installed"
            logger.warning(message)
            return OperationResult.failure(ErrorKind.NOT_INSTALLED, message, resolved)
        if resolved == self.activation.get():
            message = f"Cannot uninstall node {resolved} while it is active, switch to another version first"
            logger.warning(message)
            return OperationResult.failure(ErrorKind.ACTIVE_VERSION_CONFLICT, message, resolved)

        try:
            self.store.remove(resolved)
        except FilesystemError as e:
            logger.error("Failed to uninstall node %s: %s", resolved, e)
            return OperationResult.failure(e.kind, str(e), resolved)

        message = f"Uninstalled node {resolved}"
        logger.info(message)
        return OperationResult.success(resolved, message)

    @staticmethod
    def _invalid(version: Optional[str]) -> OperationResult:
        message = f"Invalid version {version!r}, expected MAJOR.MINOR.PATCH"
        logger.error(message)
        return OperationResult.failure(ErrorKind.INVALID_VERSION, message)
