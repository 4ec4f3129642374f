"""
Kouji Core - Shared services for all modules.

Usage:
    from kouji.core import get_config, get_logger, KOUJI_PATHS
"""

from kouji.core.config import get_config, get_config_value, KOUJI_PATHS
from kouji.core.logging import get_logger

__all__ = [
    "get_config",
    "get_config_value",
    "KOUJI_PATHS",
    "get_logger",
]
