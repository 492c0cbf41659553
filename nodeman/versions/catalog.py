"""Remote catalog of installable Node.js releases."""

import json
import logging
from typing import Any, List

from pydantic import ValidationError

from ..config import ManagerConfig
from ..errors import NodemanError, ParseError
from .download_manager import DownloadManager
from .models import VersionDescriptor

logger = logging.getLogger(__name__)


def parse_index(data: Any) -> List[VersionDescriptor]:
    """Turn decoded index.json into descriptors, keeping source order."""
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array in release index, got {type(data).__name__}")

    descriptors = []
    seen = set()
    for entry in data:
        if not isinstance(entry, dict):
            raise ParseError(f"Malformed release entry: {entry!r}")
        try:
            descriptor = VersionDescriptor(**entry)
        except ValidationError as e:
            raise ParseError(f"Malformed release entry {entry.get('version')!r}: {e}") from e
        if descriptor.version in seen:
            raise ParseError(f"Duplicate version {descriptor.version} in release index")
        seen.add(descriptor.version)
        descriptors.append(descriptor)
    return descriptors


class RemoteCatalog:
    def __init__(self, config: ManagerConfig):
        self.config = config

    @property
    def index_url(self) -> str:
        return f"{self.config.base_url}/index.json"

    async def fetch(self) -> List[VersionDescriptor]:
        """Download and parse the release index.

        Returns an empty list when the index cannot be downloaded or parsed;
        callers must read that as "unknown", not "no releases".
        """
        cache_path = self.config.catalog_cache_path
        try:
            self.config.ensure_base_dir()
            async with DownloadManager(self.config.user_agent, self.config.http_timeout) as dm:
                await dm.download_file(self.index_url, cache_path)
            with open(cache_path, 'r', encoding='utf-8') as f:
                try:
                    data = json.load(f)
                except ValueError as e:
                    raise ParseError(f"Release index is not valid JSON: {e}") from e
            return parse_index(data)
        except NodemanError as e:
            logger.error("Could not fetch release index: %s", e)
        except OSError as e:
            logger.error("Could not read release index %s: %s", cache_path, e)
        return []
