"""Runtime configuration for the version manager."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from . import __version__

DEFAULT_BASE_URL = "https://nodejs.org/dist"


def _default_base_dir() -> Path:
    return Path.home() / ".nodeman"


class ManagerConfig(BaseModel):
    """Everything the engine needs to know about where and how to work."""

    base_dir: Path = Field(default_factory=_default_base_dir)
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = f"nodeman/{__version__}"
    marker_name: str = "current"
    catalog_cache_name: str = "index.json"
    verify_checksums: bool = True
    http_timeout: Optional[float] = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def marker_path(self) -> Path:
        return self.base_dir / self.marker_name

    @property
    def catalog_cache_path(self) -> Path:
        return self.base_dir / self.catalog_cache_name

    def ensure_base_dir(self) -> Path:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        return self.base_dir

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ManagerConfig":
        """Build a config, honouring NODEMAN_* overrides."""
        environ = os.environ if environ is None else environ
        values = {}
        if environ.get("NODEMAN_DIR"):
            values["base_dir"] = Path(environ["NODEMAN_DIR"]).expanduser()
        if environ.get("NODEMAN_NODE_MIRROR"):
            values["base_url"] = environ["NODEMAN_NODE_MIRROR"]
        verify = environ.get("NODEMAN_VERIFY_CHECKSUMS")
        if verify is not None:
            values["verify_checksums"] = verify.strip().lower() not in ("0", "false", "no", "off")
        return cls(**values)
