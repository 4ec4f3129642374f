"""
Path utilities for Kouji.

Directory creation and scan-root / store-path resolution.
"""

from pathlib import Path
from typing import Optional, Union

from kouji.core.config import KOUJI_PATHS


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating if necessary. Returns path for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_root(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve a scan root to an absolute path.

    Args:
        path: Folder to scan; ``~`` is expanded. None means the configured
              ``paths.projects_root``.
    """
    if path is None or str(path) == "":
        return KOUJI_PATHS.projects_root
    return Path(path).expanduser().absolute()


def store_path_for(root: Optional[Union[str, Path]] = None) -> Path:
    """
    The side-car store colocated with a scan root (``<root>/.inside.yaml``).

    None means the configured store (``KOUJI_PATHS.store_path``).
    """
    if root is None or str(root) == "":
        return KOUJI_PATHS.store_path
    return resolve_root(root) / KOUJI_PATHS.store_filename
