"""Helpers for plain ``major.minor.patch`` version strings."""

import re
from typing import Optional, Tuple

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def normalize_version(value: str) -> Optional[str]:
    """Return ``major.minor.patch`` for ``value`` (a leading "v" is allowed), or None."""
    candidate = value.strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    if VERSION_PATTERN.match(candidate):
        return candidate
    return None


def version_key(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))
