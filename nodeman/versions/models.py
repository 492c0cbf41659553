"""Data models for Node.js releases and operation outcomes."""

from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import ErrorKind
from ..utils.versioning import VERSION_PATTERN, normalize_version, version_key

__all__ = [
    "VERSION_PATTERN", "normalize_version", "version_key",
    "VersionDescriptor", "OperationResult",
]


class VersionDescriptor(BaseModel):
    """One entry of the remote index.json."""
    model_config = ConfigDict(frozen=True)

    version: str
    date: Optional[Date] = None
    files: List[str] = []
    npm: Optional[str] = None
    v8: Optional[str] = None
    uv: Optional[str] = None
    zlib: Optional[str] = None
    openssl: Optional[str] = None
    modules: Optional[str] = None
    lts: Optional[str] = None
    security: bool = False

    @field_validator("version", mode="before")
    @classmethod
    def _strip_prefix(cls, value):
        if isinstance(value, str) and value[:1] in ("v", "V"):
            return value[1:]
        return value

    @field_validator("version")
    @classmethod
    def _plain_version(cls, value: str) -> str:
        # used verbatim as a directory name under the base dir
        if not VERSION_PATTERN.match(value):
            raise ValueError(f"{value!r} is not a MAJOR.MINOR.PATCH version")
        return value

    @field_validator("lts", mode="before")
    @classmethod
    def _falsy_lts(cls, value):
        # index.json uses `false` for non-LTS releases
        if not value:
            return None
        return value

    @property
    def is_lts(self) -> bool:
        return self.lts is not None


class OperationResult(BaseModel):
    """Outcome of install/use/uninstall."""
    model_config = ConfigDict(frozen=True)

    ok: bool
    version: Optional[str] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, version: Optional[str], message: str = "",
                error: Optional[ErrorKind] = None) -> "OperationResult":
        return cls(ok=True, version=version, message=message, error=error)

    @classmethod
    def failure(cls, error: ErrorKind, message: str,
                version: Optional[str] = None) -> "OperationResult":
        return cls(ok=False, version=version, message=message, error=error)
