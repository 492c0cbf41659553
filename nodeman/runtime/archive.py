"""Archive extraction for downloaded runtime bundles."""

import shutil
import tarfile
import zipfile
import zlib
from pathlib import Path

from ..errors import FilesystemError


def extract_archive(archive_path: Path, dest: Path) -> None:
    """Unpack a .zip or tarball into ``dest``."""
    dest.mkdir(parents=True, exist_ok=True)
    try:
        if archive_path.name.endswith(".zip"):
            with zipfile.ZipFile(archive_path, 'r') as zip_ref:
                zip_ref.extractall(dest)
        else:
            with tarfile.open(archive_path, 'r:*') as tar_ref:
                if hasattr(tarfile, "data_filter"):
                    tar_ref.extractall(dest, filter="data")
                else:
                    tar_ref.extractall(dest)
    except (zipfile.BadZipFile, tarfile.TarError, EOFError, zlib.error, NotImplementedError) as e:
        raise FilesystemError(f"Could not extract {archive_path.name}: {e}") from e
    except OSError as e:
        raise FilesystemError(f"Could not extract {archive_path.name} into {dest}: {e}") from e


def promote_single_root(dest: Path) -> None:
    """Move the contents of the archive's wrapper directory up into ``dest``."""
    entries = list(dest.iterdir())
    if len(entries) != 1 or not entries[0].is_dir():
        names = sorted(entry.name for entry in entries)
        raise FilesystemError(f"Expected a single top-level directory in archive, found {names}")

    wrapper = entries[0]
    # Rename first so a child named like the wrapper cannot collide
    staging = dest / f".{wrapper.name}.unpack"
    try:
        wrapper.rename(staging)
        for item in staging.iterdir():
            shutil.move(str(item), str(dest / item.name))
        staging.rmdir()
    except OSError as e:
        raise FilesystemError(f"Could not move files out of {wrapper.name}: {e}") from e
