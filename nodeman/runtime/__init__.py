"""Local install state and environment activation."""

from .activation import ActivationState
from .install_store import InstallStore, scan

__all__ = ["ActivationState", "InstallStore", "scan"]
