"""Error kinds raised by the engine components."""

from enum import Enum


class ErrorKind(str, Enum):
    NETWORK = "network"
    PARSE = "parse"
    ALREADY_INSTALLED = "already_installed"
    NOT_INSTALLED = "not_installed"
    ACTIVE_VERSION_CONFLICT = "active_version_conflict"
    LTS_NOT_FOUND = "lts_not_found"
    FILESYSTEM = "filesystem"
    CHECKSUM = "checksum"
    INVALID_VERSION = "invalid_version"


class NodemanError(Exception):
    """Base class for failures raised by engine components."""
    kind = ErrorKind.FILESYSTEM


class NetworkError(NodemanError):
    kind = ErrorKind.NETWORK


class ParseError(NodemanError):
    kind = ErrorKind.PARSE


class FilesystemError(NodemanError):
    kind = ErrorKind.FILESYSTEM


class ChecksumError(NodemanError):
    kind = ErrorKind.CHECKSUM
