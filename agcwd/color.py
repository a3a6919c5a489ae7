"""
Color-Space Conversion Module

Stateless RGB <-> HSV and RGB <-> YUV (BT.601) conversions used by the AGCWD
enhancement pipeline.

Two domains are provided:

- 8-bit integer domain (``rgb_to_hsv``, ``hsv_to_rgb``, ``rgb_to_yuv``, ...).
  Hue is expressed in [0, 255) instead of degrees. HSV arithmetic is integer
  with round-to-nearest division; the coarse hue limits an HSV round trip
  to +/-4 per channel. A YUV round trip stays within +/-2.
  These functions accept plain ints (returning a tuple of ints) or
  equally-shaped numpy arrays (returning a tuple of uint8 arrays).
- Normalized float domain (``rgb_to_hsv_float``, ``hsv_to_rgb_float``) on
  ``(..., 3)`` arrays in [0, 1], backed by scikit-image.

Usage:
    from agcwd.color import rgb_to_hsv, hsv_to_rgb

    h, s, v = rgb_to_hsv(10, 30, 200)
    r, g, b = hsv_to_rgb(h, s, v)
"""

import numpy as np
from numpy.typing import NDArray
from skimage import color


# =============================================================================
# Helper Functions
# =============================================================================

def _as_channels(*channels):
    """
    Convert channel arguments to int64 arrays of a common shape.

    Returns:
        tuple: (list_of_arrays, all_inputs_were_scalars)
    """
    scalar = all(np.ndim(c) == 0 for c in channels)
    arrays = [np.atleast_1d(np.asarray(c, dtype=np.int64)) for c in channels]
    for arr in arrays:
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("channel values must lie in [0, 255]")
    return np.broadcast_arrays(*arrays), scalar


def _round_div(numerator, denominator):
    """Integer division rounding half up, valid for negative numerators."""
    return (2 * numerator + denominator) // (2 * denominator)


def _pack(channels, scalar: bool):
    """Return channels as uint8 arrays, or as ints for scalar input."""
    out = tuple(np.clip(c, 0, 255).astype(np.uint8) for c in channels)
    if scalar:
        return tuple(int(c[0]) for c in out)
    return out


# =============================================================================
# HSV (8-bit integer domain)
# =============================================================================

def rgb_to_hsv(r, g, b):
    """
    Convert 8-bit RGB to 8-bit HSV.

    ``v`` is the maximum channel, ``s`` is the chroma relative to ``v`` scaled
    to 255, and ``h`` is the hue sector position scaled so that a full turn
    spans [0, 255).

    Parameters
    ----------
    r, g, b : int or array_like
        Channel values in [0, 255].

    Returns
    -------
    tuple
        (h, s, v) as ints for scalar input, uint8 arrays otherwise.

    Examples
    --------
    >>> rgb_to_hsv(255, 0, 0)
    (0, 255, 255)
    """
    (r, g, b), scalar = _as_channels(r, g, b)

    mx = np.maximum(r, np.maximum(g, b))
    mn = np.minimum(r, np.minimum(g, b))
    n = mx - mn

    s = np.where(mx == 0, 0, _round_div(n * 255, np.where(mx == 0, 1, mx)))
    v = mx

    # Hue in 1/(6*255) of a turn before the final scaling
    safe_n = np.where(n == 0, 1, n)
    red_hue = _round_div((g - b) * 255, safe_n) + np.where(g < b, 6 * 255, 0)
    green_hue = 2 * 255 + _round_div((b - r) * 255, safe_n)
    blue_hue = 4 * 255 + _round_div((r - g) * 255, safe_n)

    h6 = np.select(
        [n == 0, mx == r, mx == g],
        [0, red_hue, green_hue],
        default=blue_hue,
    )
    h = _round_div(h6, 6) % 255

    return _pack((h, s, v), scalar)


def hsv_to_rgb(h, s, v):
    """
    Convert 8-bit HSV (as produced by ``rgb_to_hsv``) back to 8-bit RGB.

    Parameters
    ----------
    h, s, v : int or array_like
        Channel values in [0, 255].

    Returns
    -------
    tuple
        (r, g, b) as ints for scalar input, uint8 arrays otherwise.
    """
    (h, s, v), scalar = _as_channels(h, s, v)

    h6 = h * 6
    f = h6 % 255
    sector = h6 // 255

    # Sector fractions in 255ths, see the float formulation p/q/t
    p = _round_div(v * (255 - s), 255)
    q = _round_div(v * (255 * 255 - s * f), 255 * 255)
    t = _round_div(v * (255 * 255 - s * (255 - f)), 255 * 255)

    conditions = [sector == 1, sector == 2, sector == 3, sector == 4, sector == 5]
    r = np.select(conditions, [q, p, p, t, v], default=v)
    g = np.select(conditions, [v, v, q, p, p], default=t)
    b = np.select(conditions, [p, t, v, v, q], default=p)

    grey = s == 0
    r = np.where(grey, v, r)
    g = np.where(grey, v, g)
    b = np.where(grey, v, b)

    return _pack((r, g, b), scalar)


# =============================================================================
# YUV (BT.601, 8-bit integer domain)
# =============================================================================

_YUV_FROM_RGB = np.array([
    [66, 129, 25],
    [-38, -74, 112],
    [112, -94, -18],
], dtype=np.float64) / 256.0

# Exact inverse of the forward matrix; a round trip stays within +/-2
_RGB_FROM_YUV = np.linalg.inv(_YUV_FROM_RGB)


def rgb_to_yuv(r, g, b):
    """
    Convert 8-bit RGB to studio-swing BT.601 YUV.

    Uses the integer approximation with coefficients scaled by 256:
    Y in [16, 235], U and V in [16, 240] centred on 128.

    See: https://en.wikipedia.org/wiki/YUV
    """
    (r, g, b), scalar = _as_channels(r, g, b)

    y = ((66 * r + 129 * g + 25 * b + 128) >> 8) + 16
    u = ((-38 * r - 74 * g + 112 * b + 128) >> 8) + 128
    v = ((112 * r - 94 * g - 18 * b) >> 8) + 128

    return _pack((y, u, v), scalar)


def yuv_to_rgb(y, u, v):
    """
    Convert studio-swing BT.601 YUV back to 8-bit RGB.

    Applies the exact inverse of the forward matrix, rounds half up and clamps
    to [0, 255].

    See: https://en.wikipedia.org/wiki/YUV
    """
    (y, u, v), scalar = _as_channels(y, u, v)

    yuv = np.stack([y - 16, u - 128, v - 128], axis=-1).astype(np.float64)
    rgb = np.floor(yuv @ _RGB_FROM_YUV.T + 0.5)

    return _pack((rgb[..., 0], rgb[..., 1], rgb[..., 2]), scalar)


def yuv_to_hsv(y, u, v):
    """Convert BT.601 YUV to 8-bit HSV by way of RGB."""
    r, g, b = yuv_to_rgb(y, u, v)
    return rgb_to_hsv(r, g, b)


def hsv_to_yuv(h, s, v):
    """Convert 8-bit HSV to BT.601 YUV by way of RGB."""
    r, g, b = hsv_to_rgb(h, s, v)
    return rgb_to_yuv(r, g, b)


# =============================================================================
# HSV (normalized float domain)
# =============================================================================

def rgb_to_hsv_float(rgb: NDArray) -> NDArray:
    """
    Convert normalized RGB to normalized HSV.

    Parameters
    ----------
    rgb : NDArray
        Array of shape (..., 3) with values in [0, 1].

    Returns
    -------
    NDArray
        float64 array of the same shape holding (h, s, v), hue in [0, 1).
    """
    return color.rgb2hsv(np.asarray(rgb, dtype=np.float64))


def hsv_to_rgb_float(hsv: NDArray) -> NDArray:
    """
    Convert normalized HSV to normalized RGB.

    Parameters
    ----------
    hsv : NDArray
        Array of shape (..., 3) with values in [0, 1].

    Returns
    -------
    NDArray
        float64 array of the same shape holding (r, g, b) in [0, 1].
    """
    return color.hsv2rgb(np.asarray(hsv, dtype=np.float64))


__all__ = [
    'rgb_to_hsv',
    'hsv_to_rgb',
    'rgb_to_yuv',
    'yuv_to_rgb',
    'yuv_to_hsv',
    'hsv_to_yuv',
    'rgb_to_hsv_float',
    'hsv_to_rgb_float',
]
