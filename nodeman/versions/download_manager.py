"""Download manager for release indexes, archives and checksums."""

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

import aiofiles
import aiohttp

from ..errors import NetworkError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class DownloadManager:
    def __init__(self, user_agent: str, timeout: Optional[float] = None):
        self.headers: Dict[str, str] = {"User-Agent": user_agent}
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.session:
            await self.session.close()

    async def download_file(self, url: str, dest: Path,
                            progress_callback: Optional[Callable] = None) -> Path:
        """Stream ``url`` into ``dest``."""
        logger.debug("GET %s -> %s", url, dest)
        try:
            async with self.session.get(url) as resp:
                resp.raise_for_status()
                total_size = resp.content_length or 0
                downloaded = 0

                dest.parent.mkdir(parents=True, exist_ok=True)

                async with aiofiles.open(dest, 'wb') as f:
                    async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                        await f.write(chunk)
                        downloaded += len(chunk)
                        if progress_callback:
                            await progress_callback(dest.name, downloaded, total_size)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Failed to download {url}: {e}") from e
        return dest

    async def fetch_text(self, url: str) -> str:
        """GET ``url`` and return the body as text."""
        logger.debug("GET %s", url)
        try:
            async with self.session.get(url) as resp:
                resp.raise_for_status()
                return await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Failed to fetch {url}: {e}") from e

    @staticmethod
    async def sha256_file(file_path: Path) -> str:
        """SHA-256 hex digest of a file."""
        hash_sha256 = hashlib.sha256()
        async with aiofiles.open(file_path, 'rb') as f:
            while chunk := await f.read(CHUNK_SIZE):
                hash_sha256.update(chunk)
        return hash_sha256.hexdigest()
