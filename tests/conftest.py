"""Shared fixtures: a temporary base directory and a fake Node.js dist server."""

import hashlib
import io
import json
import tarfile
import zipfile
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from nodeman.config import ManagerConfig
from nodeman.errors import NetworkError
from nodeman.runtime.environment import Platform, archive_name
from nodeman.versions.download_manager import DownloadManager
from nodeman.versions.manager import VersionManager

BASE_URL = "https://dist.example.test"
LINUX_X64 = Platform("linux", "x64", "tar.gz")


def make_tarball(root: str, files: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for relative, content in files.items():
            info = tarfile.TarInfo(f"{root}/{relative}" if root else relative)
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def make_zip(root: str, files: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for relative, content in files.items():
            zf.writestr(f"{root}/{relative}" if root else relative, content)
    return buffer.getvalue()


class FakeDist:
    """Serves index.json, archives and SHASUMS256.txt from memory."""

    def __init__(self, base_url: str = BASE_URL, platform: Platform = LINUX_X64):
        self.base_url = base_url
        self.platform = platform
        self.index: List[dict] = []
        self.files: Dict[str, bytes] = {}
        self.requests: List[str] = []
        self.index_override: Optional[bytes] = None

    def add_release(self, version: str, lts=False, archive: Optional[bytes] = None,
                    checksum: Optional[str] = None):
        self.index.append({
            "version": f"v{version}",
            "date": "2024-01-09",
            "files": [f"{self.platform.os}-{self.platform.arch}"],
            "npm": "10.2.4",
            "v8": "11.3.244.8",
            "uv": "1.46.0",
            "zlib": "1.3.0.1-motley",
            "openssl": "3.0.12+quic",
            "modules": "115",
            "lts": lts,
            "security": False,
        })
        name = archive_name(version, self.platform)
        if archive is None:
            archive = make_tarball(f"node-v{version}-{self.platform.os}-{self.platform.arch}", {
                "bin/node": f"node {version}".encode(),
                "lib/node_modules/npm/package.json": b"{}",
                "README.md": b"readme",
            })
        self.files[f"{self.base_url}/v{version}/{name}"] = archive
        digest = checksum or hashlib.sha256(archive).hexdigest()
        self.files[f"{self.base_url}/v{version}/SHASUMS256.txt"] = (
            f"{'0' * 64}  node-v{version}.tar.gz\n{digest}  {name}\n".encode()
        )

    def _body(self, url: str) -> bytes:
        self.requests.append(url)
        if url == f"{self.base_url}/index.json":
            if self.index_override is not None:
                return self.index_override
            return json.dumps(self.index).encode()
        if url not in self.files:
            raise NetworkError(f"Failed to download {url}: 404 Not Found")
        return self.files[url]

    async def download_file(self, url: str, dest: Path, progress_callback=None) -> Path:
        body = self._body(url)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(body)
        if progress_callback:
            await progress_callback(dest.name, len(body), len(body))
        return dest

    async def fetch_text(self, url: str) -> str:
        return self._body(url).decode()


@pytest.fixture
def config(tmp_path: Path) -> ManagerConfig:
    return ManagerConfig(base_dir=tmp_path / "nodeman", base_url=BASE_URL)


@pytest.fixture
def dist(monkeypatch) -> FakeDist:
    fake = FakeDist()

    async def download_file(self, url, dest, progress_callback=None):
        return await fake.download_file(url, dest, progress_callback)

    async def fetch_text(self, url):
        return await fake.fetch_text(url)

    monkeypatch.setattr(DownloadManager, "download_file", download_file)
    monkeypatch.setattr(DownloadManager, "fetch_text", fetch_text)
    return fake


@pytest.fixture
def environ() -> Dict[str, str]:
    return {"PATH": "/usr/local/bin:/usr/bin:/bin"}


@pytest.fixture
def manager(config: ManagerConfig, environ) -> VersionManager:
    return VersionManager(config, platform=LINUX_X64, environ=environ)


def install_fake_version(config: ManagerConfig, version: str) -> Path:
    """Lay out a version directory as a finished install would."""
    bin_dir = config.base_dir / version / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "node").write_text(f"node {version}")
    return config.base_dir / version
