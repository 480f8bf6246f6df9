"""Configuration management for Mini Git."""

from .types import LockConfig, MiniGitConfig
from .loader import ConfigLoader

__all__ = [
    "LockConfig",
    "MiniGitConfig",
    "ConfigLoader",
]
