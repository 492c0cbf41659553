"""Platform detection and PATH activation for installed runtimes."""

import os
import platform
import re
import sys
from pathlib import Path, PurePath
from typing import Callable, List, MutableMapping, NamedTuple, Optional

MANAGER_DIR_NAMES = frozenset({".nodeman", "nodeman", ".nvm", "nvm", "nvm-windows"})
RUNTIME_DIR_PATTERN = re.compile(r"^node-v\d+\.\d+\.\d+", re.IGNORECASE)

PathMatcher = Callable[[str], bool]


class Platform(NamedTuple):
    os: str
    arch: str
    ext: str

    @property
    def is_windows(self) -> bool:
        return self.os == "win"


def detect_platform(system: Optional[str] = None, machine: Optional[str] = None) -> Platform:
    """Map the running interpreter to node's os/arch/archive naming."""
    system = (system or platform.system()).lower()
    machine = (machine if machine is not None else platform.machine()).lower()

    os_map = {
        "windows": "win",
        "darwin": "darwin",
        "linux": "linux",
    }
    os_id = os_map.get(system, "linux")

    if machine in ("amd64", "x86_64", "x64", "arm64", "aarch64"):
        arch_id = "x64"
    elif machine in ("i386", "i686", "x86"):
        arch_id = "x86"
    else:
        arch_id = "x64" if sys.maxsize > 2 ** 32 else "x86"

    ext = "zip" if os_id == "win" else "tar.gz"
    return Platform(os_id, arch_id, ext)


def archive_name(version: str, plat: Platform) -> str:
    return f"node-v{version}-{plat.os}-{plat.arch}.{plat.ext}"


def download_url(base_url: str, version: str, plat: Platform) -> str:
    return f"{base_url}/v{version}/{archive_name(version, plat)}"


def binary_dir(version_dir: Path, plat: Platform) -> Path:
    """Windows archives keep node.exe at the root; others use bin/."""
    if plat.is_windows:
        return version_dir
    return version_dir / "bin"


class ManagedPathMatcher:
    """Recognises PATH entries that belong to a managed Node.js install."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = os.path.normcase(os.path.abspath(base_dir)) if base_dir else None

    def __call__(self, segment: str) -> bool:
        if not segment:
            return False
        if self.base_dir:
            normalized = os.path.normcase(os.path.abspath(segment))
            if normalized == self.base_dir or normalized.startswith(self.base_dir + os.sep):
                return True
        for part in PurePath(segment.replace("\\", "/")).parts:
            if part.lower() in MANAGER_DIR_NAMES or RUNTIME_DIR_PATTERN.match(part):
                return True
        return False


def rewrite_path(path_value: str, bin_dir: Path, matcher: PathMatcher,
                 sep: str = os.pathsep) -> str:
    """Prepend ``bin_dir`` and drop every segment ``matcher`` claims."""
    segments: List[str] = path_value.split(sep) if path_value else []
    kept = [segment for segment in segments if not matcher(segment)]
    return sep.join([str(bin_dir)] + kept)


def activate(bin_dir: Path, environ: Optional[MutableMapping[str, str]],
             matcher: PathMatcher) -> str:
    """Rewrite PATH of ``environ`` (the current process by default)."""
    environ = os.environ if environ is None else environ
    new_path = rewrite_path(environ.get("PATH", ""), bin_dir, matcher)
    environ["PATH"] = new_path
    return new_path
