"""Configuration loader for Mini Git.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_global_minigit_dir, log_debug
from ..utils.fs import safe_json_load
from .types import MiniGitConfig

PROJECT_CONFIG_NAME = ".minigit.json"


class ConfigLoader:
    """Loads and manages Mini Git configuration."""

    def __init__(self, project_root: Path | None = None):
        """Initialize config loader.

        Args:
            project_root: Project root directory (for project-local config)
        """
        self.project_root = project_root
        self._config: MiniGitConfig | None = None

    @property
    def config(self) -> MiniGitConfig:
        """Get loaded configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def global_config_path(self) -> Path:
        return get_global_minigit_dir() / "config.json"

    def project_config_path(self) -> Path | None:
        if not self.project_root:
            return None
        return Path(self.project_root) / PROJECT_CONFIG_NAME

    def load(self) -> MiniGitConfig:
        """Load configuration from all sources.

        Priority (highest to lowest):
        1. Project-local config (.minigit.json)
        2. Global config (~/.minigit/config.json)
        3. Default values

        Returns:
            Merged MiniGitConfig
        """
        merged: dict[str, Any] = {}

        global_path = self.global_config_path()
        if global_path.exists():
            merged = self._deep_merge(merged, self._load_object(global_path))

        project_path = self.project_config_path()
        if project_path is not None and project_path.exists():
            merged = self._deep_merge(merged, self._load_object(project_path))

        config = MiniGitConfig.from_dict(merged)
        log_debug(
            f"Config: repoDir={config.repo_dir} hash={config.hash_algorithm} idLength={config.id_length}"
        )
        return config

    @staticmethod
    def _load_object(path: Path) -> dict[str, Any]:
        data = safe_json_load(path, {})
        if not isinstance(data, dict):
            log_debug(f"Ignoring non-object config: {path}")
            return {}
        return data

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
