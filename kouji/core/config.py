"""
Configuration management for Kouji.

Loads config.yaml and provides type-safe access to settings.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Config file lives inside the kouji package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        _config_cache = yaml.safe_load(f) or {}

    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'store', 'filename')
        default: Value to return if key not found

    Example:
        port = get_config_value('server', 'port', default=8080)
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


class KoujiPaths:
    """
    Centralized path access for Kouji.

    All paths are loaded from config.yaml with sensible fallbacks.

    Usage:
        from kouji.core.config import KOUJI_PATHS
        root = KOUJI_PATHS.projects_root
        store = KOUJI_PATHS.store_path
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _resolve(self, raw: str) -> Path:
        """Resolve a path: expand ``~``, and if relative, resolve against _PACKAGE_DIR."""
        p = Path(raw).expanduser()
        if not p.is_absolute():
            p = _PACKAGE_DIR / p
        return p

    @property
    def projects_root(self) -> Path:
        self._ensure_config()
        raw = self._config.get("paths", {}).get("projects_root", "~/penguin/projects")
        return self._resolve(raw)

    @property
    def store_filename(self) -> str:
        self._ensure_config()
        return self._config.get("store", {}).get("filename", ".inside.yaml")

    @property
    def store_path(self) -> Path:
        return self.projects_root / self.store_filename


# Singleton instance
KOUJI_PATHS = KoujiPaths()
