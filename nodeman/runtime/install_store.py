"""On-disk set of installed Node.js versions."""

import logging
import shutil
from pathlib import Path
from typing import List

from ..errors import FilesystemError
from ..utils.versioning import VERSION_PATTERN

logger = logging.getLogger(__name__)


def scan(base_dir: Path) -> List[str]:
    """Version directories directly under ``base_dir``, in filesystem order."""
    if not base_dir.is_dir():
        return []
    return [
        item.name for item in base_dir.iterdir()
        if item.is_dir() and VERSION_PATTERN.match(item.name)
    ]


class InstallStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.installed: List[str] = []

    def version_dir(self, version: str) -> Path:
        return self.base_dir / version

    def refresh(self) -> List[str]:
        self.installed = scan(self.base_dir)
        return self.installed

    def list(self) -> List[str]:
        return list(self.refresh())

    def exists(self, version: str) -> bool:
        return self.version_dir(version).is_dir()

    def remove(self, version: str) -> None:
        """Delete a version's directory tree."""
        target = self.version_dir(version)
        try:
            shutil.rmtree(target)
        except OSError as e:
            raise FilesystemError(f"Could not remove {target}: {e}") from e
        finally:
            self.refresh()
        logger.debug("Removed %s", target)
