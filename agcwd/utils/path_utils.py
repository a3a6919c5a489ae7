"""
Path Utilities - Config directory and PNG file paths for AGCWD tools.
"""

import os
from pathlib import Path

# Environment variable overriding the default ~/.agcwd config directory
CONFIG_DIR_ENV = "AGCWD_CONFIG_DIR"

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def get_agcwd_config_dir() -> Path:
    """
    Get the AGCWD configuration directory.

    Returns:
        Path from $AGCWD_CONFIG_DIR when set, otherwise ~/.agcwd/
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".agcwd"


def ensure_agcwd_config_dir() -> Path:
    """Create the configuration directory if needed and return it."""
    config_dir = get_agcwd_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def has_png_signature(path: str) -> bool:
    """
    Check whether a file starts with the 8-byte PNG signature.

    Returns False for missing or unreadable files instead of raising.
    """
    try:
        with open(path, "rb") as f:
            return f.read(len(PNG_SIGNATURE)) == PNG_SIGNATURE
    except OSError:
        return False


def png_output_path(path: str) -> str:
    """
    Absolute path for an output image, with ``.png`` appended when the name
    has no extension.
    """
    path = os.path.abspath(os.path.expanduser(path))
    if not os.path.splitext(path)[1]:
        path += ".png"
    return path
