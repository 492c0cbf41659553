"""Persisted pointer to the active Node.js version."""

import logging
from pathlib import Path
from typing import Optional

from ..errors import FilesystemError

logger = logging.getLogger(__name__)


class ActivationState:
    def __init__(self, marker_path: Path):
        self.marker_path = marker_path
        self._current: Optional[str] = self._load()

    def _load(self) -> Optional[str]:
        if not self.marker_path.is_file():
            return None
        try:
            value = self.marker_path.read_text(encoding='utf-8').strip()
        except OSError as e:
            logger.warning("Could not read %s: %s", self.marker_path, e)
            return None
        return value or None

    def get(self) -> Optional[str]:
        return self._current

    def set(self, version: str) -> None:
        """Write the marker, then update the in-memory copy."""
        try:
            self.marker_path.parent.mkdir(parents=True, exist_ok=True)
            self.marker_path.write_text(version, encoding='utf-8')
        except OSError as e:
            raise FilesystemError(f"Could not write {self.marker_path}: {e}") from e
        self._current = version
