"""
Utils package - Common utilities for AGCWD tools.
"""

from .path_utils import (
    get_agcwd_config_dir,
    ensure_agcwd_config_dir,
    has_png_signature,
    png_output_path,
)

from .constants import (
    NUM_LEVELS,
    MAX_LEVEL,
    DEFAULT_ALPHA,
    DEFAULT_FUSION,
    DEFAULT_CHUNK_PIXELS,
    EPSILON,
)

from .logger import setup_logger

__all__ = [
    # Path utilities
    "get_agcwd_config_dir",
    "ensure_agcwd_config_dir",
    "has_png_signature",
    "png_output_path",
    # Constants
    "NUM_LEVELS",
    "MAX_LEVEL",
    "DEFAULT_ALPHA",
    "DEFAULT_FUSION",
    "DEFAULT_CHUNK_PIXELS",
    "EPSILON",
    # Logging
    "setup_logger",
]
