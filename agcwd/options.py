"""
Enhancement Options - Configuration of the AGCWD driver.

Options come from three places: keyword arguments in Python code, a dynamic
mapping handed over by a host (CLI arguments, an HTTP request, ...), and an
optional JSON file stored in ~/.agcwd/options.json. All of them end up in an
``AgcwdOptions`` instance, which validates its fields on construction.
"""

import json
import numbers
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .processing.intensity import validate_alpha
from .utils.constants import DEFAULT_ALPHA, DEFAULT_FUSION, DEFAULT_CHUNK_PIXELS
from .utils.path_utils import get_agcwd_config_dir, ensure_agcwd_config_dir

# Configure module logger
logger = logging.getLogger(__name__)

OPTIONS_FILENAME = "options.json"

# Weight used when fusion is switched on without an explicit ratio
FUSION_ON_WEIGHT = 0.5


def _normalize_fusion(fusion: Union[bool, float, None]) -> float:
    """Turn a bool or float fusion setting into a blend weight in [0, 1]."""
    if fusion is None or fusion is False:
        return 0.0
    if fusion is True:
        return FUSION_ON_WEIGHT
    weight = float(fusion)
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"fusion must be a bool or lie in [0, 1], got {fusion}")
    return weight


@dataclass
class AgcwdOptions:
    """
    Parameters of one enhancement call.

    Attributes:
        alpha: Weighting-distribution exponent in (0, 1].
        fusion: Weight of the original image in the output, in [0, 1].
            ``True`` means an even blend, ``False`` or 0 disables blending.
        chunk_pixels: Pixels processed per pass step.
    """
    alpha: float = DEFAULT_ALPHA
    fusion: float = DEFAULT_FUSION
    chunk_pixels: int = DEFAULT_CHUNK_PIXELS

    def __post_init__(self):
        self.alpha = validate_alpha(self.alpha)
        self.fusion = _normalize_fusion(self.fusion)
        if (isinstance(self.chunk_pixels, bool)
                or not isinstance(self.chunk_pixels, numbers.Integral)
                or self.chunk_pixels <= 0):
            raise ValueError(f"chunk_pixels must be a positive integer, got {self.chunk_pixels}")
        self.chunk_pixels = int(self.chunk_pixels)

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "AgcwdOptions":
        """
        Build options from a dynamic mapping such as parsed JSON.

        Keys that are missing or None keep their defaults.

        Raises:
            ValueError: If the mapping contains unknown keys or invalid values.
        """
        if values is None:
            return cls()
        if not isinstance(values, Mapping):
            raise ValueError(f"options must be a mapping, got {type(values).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(unknown)}")

        return cls(**{k: v for k, v in values.items() if v is not None})

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def fusion_enabled(self) -> bool:
        return self.fusion > 0.0


def get_options_path() -> Path:
    """
    Get the path to the default options file.

    Returns:
        Path to options.json within the AGCWD config directory
    """
    return get_agcwd_config_dir() / OPTIONS_FILENAME


def load_options(path: Optional[Union[str, Path]] = None) -> AgcwdOptions:
    """
    Read options from a JSON file.

    Args:
        path: Options file. If None, ~/.agcwd/options.json is used and a
            missing file yields the defaults.

    Returns:
        Validated AgcwdOptions.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the file is not valid JSON or holds invalid options.
    """
    if path is None:
        p = get_options_path()
        if not p.exists():
            logger.debug(f"No options file at {p}, using defaults")
            return AgcwdOptions()
    else:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Options file not found: {p}")

    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in options file {p}: {e}")

    logger.debug(f"Loaded options from {p}")
    return AgcwdOptions.from_mapping(data)


def save_options(options: AgcwdOptions, path: Optional[Union[str, Path]] = None) -> Path:
    """
    Write options to a JSON file.

    Args:
        options: Options to persist.
        path: Target file. If None, ~/.agcwd/options.json is used.

    Returns:
        Path of the written file.
    """
    if path is None:
        ensure_agcwd_config_dir()
        p = get_options_path()
    else:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", encoding="utf-8") as f:
        json.dump(options.to_dict(), f, indent=2)

    logger.info(f"Options written to {p}")
    return p


__all__ = [
    'AgcwdOptions',
    'FUSION_ON_WEIGHT',
    'get_options_path',
    'load_options',
    'save_options',
]
