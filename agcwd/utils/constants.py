"""
AGCWD Constants Module

Centralized location for the numeric constants used by the enhancement
pipeline. Every derived table (histogram, PDF, CDF, curve) has exactly
NUM_LEVELS entries, one per 8-bit brightness level.

Usage
-----
    from agcwd.utils.constants import NUM_LEVELS, DEFAULT_ALPHA

    hist = np.zeros(NUM_LEVELS, dtype=np.int64)
"""

import numpy as np

# =============================================================================
# Intensity Levels
# =============================================================================

# Only 8-bit channels are supported
NUM_LEVELS: int = 256
MAX_LEVEL: int = NUM_LEVELS - 1


# =============================================================================
# Default Enhancement Parameters
# =============================================================================

# Weighting-distribution exponent, valid range (0, 1]
# Values near 0 approach uniform weighting, 1 keeps the raw PDF shape
DEFAULT_ALPHA: float = 0.5

# Weight of the original image when blending (0 = enhanced only)
DEFAULT_FUSION: float = 0.0

# Pixels processed per pass step; bounds the size of temporary arrays
DEFAULT_CHUNK_PIXELS: int = 1 << 20


# =============================================================================
# Numerics
# =============================================================================

# Guard for pdf_max == pdf_min in the weighting-distribution denominator
EPSILON: float = float(np.finfo(np.float64).eps)


# =============================================================================
# Module exports
# =============================================================================

__all__ = [
    'NUM_LEVELS',
    'MAX_LEVEL',
    'DEFAULT_ALPHA',
    'DEFAULT_FUSION',
    'DEFAULT_CHUNK_PIXELS',
    'EPSILON',
]
