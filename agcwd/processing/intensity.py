"""
Intensity Transformation Module - AGCWD curve construction

Builds the Adaptive Gamma Correction with Weighting Distribution (AGCWD)
lookup table from a brightness histogram:

    histogram -> PDF -> weighted PDF -> CDF -> intensity transformation curve

Every table has NUM_LEVELS (256) entries and is computed fresh for each image.
All functions accept and return NumPy arrays.

Usage:
    from agcwd.processing.intensity import histogram, agcwd_curve

    hist = histogram(brightness)
    curve = agcwd_curve(hist, alpha=0.5)
"""

import logging
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from ..utils.constants import NUM_LEVELS, MAX_LEVEL, DEFAULT_ALPHA, EPSILON

logger = logging.getLogger(__name__)

_LEVELS = np.arange(NUM_LEVELS, dtype=np.float64) / MAX_LEVEL


def validate_alpha(alpha: float) -> float:
    """Check that ``alpha`` lies in (0, 1] and return it as a float."""
    alpha = float(alpha)
    if not 0.0 < alpha <= 1.0:
        raise ValueError(f"alpha must lie in (0, 1], got {alpha}")
    return alpha


def histogram(brightness: NDArray) -> NDArray:
    """
    Count how many samples fall on each of the 256 brightness levels.

    Parameters
    ----------
    brightness : NDArray
        uint8 array of per-pixel brightness values, any shape.

    Returns
    -------
    NDArray
        int64 array of length 256. Its sum equals ``brightness.size``.
    """
    brightness = np.asarray(brightness)
    if brightness.dtype != np.uint8:
        raise TypeError(f"brightness must be uint8, got {brightness.dtype}")
    return np.bincount(brightness.ravel(), minlength=NUM_LEVELS).astype(np.int64)


def merge_histograms(partials: Iterable[NDArray]) -> NDArray:
    """
    Merge partial histograms by elementwise addition.

    The merge is commutative and associative, so histograms of any split of
    the pixels combine into the histogram of the whole image.
    """
    total = np.zeros(NUM_LEVELS, dtype=np.int64)
    for part in partials:
        total += part
    return total


def probability_density(hist: NDArray) -> NDArray:
    """
    Normalize a histogram into a probability density function.

    Raises
    ------
    ValueError
        If the histogram counts no pixels.
    """
    hist = np.asarray(hist, dtype=np.float64)
    if hist.shape != (NUM_LEVELS,):
        raise ValueError(f"histogram must have {NUM_LEVELS} bins, got shape {hist.shape}")
    total = hist.sum()
    if total <= 0:
        raise ValueError("cannot build a probability density from zero pixels")
    return hist / total


def weighting_distribution(pdf: NDArray, alpha: float = DEFAULT_ALPHA) -> NDArray:
    """
    Reshape a PDF with the AGCWD weighting distribution.

    ``pdf_w = pdf_max * ((pdf - pdf_min) / (pdf_max - pdf_min + eps)) ** alpha``

    The minimum and maximum are taken over all 256 bins. Smaller ``alpha``
    flattens the distribution towards uniform weighting; ``alpha = 1`` keeps
    the shape of the raw PDF.

    Parameters
    ----------
    pdf : NDArray
        Probability density of length 256.
    alpha : float, optional
        Weighting exponent in (0, 1]. Default is 0.5.

    Returns
    -------
    NDArray
        Non-negative weighted PDF (not normalized).
    """
    alpha = validate_alpha(alpha)
    pdf = np.asarray(pdf, dtype=np.float64)

    pdf_max = pdf.max()
    pdf_min = pdf.min()
    spread = pdf_max - pdf_min + EPSILON

    return pdf_max * np.power((pdf - pdf_min) / spread, alpha)


def cumulative_density(pdf_w: NDArray) -> NDArray:
    """
    Integrate a (weighted) PDF into a CDF that ends at exactly 1.

    A weighted PDF with no mass only arises when every level is equally
    populated; its CDF is then the uniform ramp ``(i + 1) / 256``.
    """
    cdf = np.cumsum(np.asarray(pdf_w, dtype=np.float64))
    total = cdf[-1]
    if total <= 0:
        return np.arange(1, NUM_LEVELS + 1, dtype=np.float64) / NUM_LEVELS
    return cdf / total


def transformation_curve(cdf: NDArray) -> NDArray:
    """
    Build the normalized intensity transformation curve.

    ``curve[i] = (i / 255) ** (1 - cdf[i])``

    Returns
    -------
    NDArray
        float64 array of length 256 with values in [0, 1], non-decreasing,
        ``curve[0] == 0``.
    """
    cdf = np.asarray(cdf, dtype=np.float64)
    curve = np.power(_LEVELS, 1.0 - cdf)
    # 0 ** 0 evaluates to 1
    curve[0] = 0.0
    return curve


def curve_to_lut(curve: NDArray) -> NDArray:
    """Quantize a normalized curve to a uint8 lookup table (round half up)."""
    scaled = np.floor(np.asarray(curve, dtype=np.float64) * MAX_LEVEL + 0.5)
    return np.clip(scaled, 0, MAX_LEVEL).astype(np.uint8)


def identity_curve() -> NDArray:
    """Return the normalized curve that maps every level to itself."""
    return _LEVELS.copy()


def agcwd_curve(hist: NDArray, alpha: float = DEFAULT_ALPHA) -> NDArray:
    """
    Run the full AGCWD pipeline on a brightness histogram.

    An image with a single brightness level has no contrast to redistribute
    and gets the identity curve.

    Parameters
    ----------
    hist : NDArray
        Histogram of length 256 counting at least one pixel.
    alpha : float, optional
        Weighting exponent in (0, 1]. Default is 0.5.

    Returns
    -------
    NDArray
        Normalized intensity transformation curve of length 256.

    Examples
    --------
    >>> import numpy as np
    >>> hist = np.bincount(np.random.randint(0, 256, 1000), minlength=256)
    >>> lut = curve_to_lut(agcwd_curve(hist, alpha=0.5))
    """
    alpha = validate_alpha(alpha)
    pdf = probability_density(hist)
    occupied = np.count_nonzero(pdf)
    if occupied == 1:
        logger.debug("single brightness level, using identity curve")
        return identity_curve()

    pdf_w = weighting_distribution(pdf, alpha)
    cdf = cumulative_density(pdf_w)
    logger.debug(f"AGCWD curve: {occupied} occupied levels, alpha={alpha}")
    return transformation_curve(cdf)


__all__ = [
    'validate_alpha',
    'histogram',
    'merge_histograms',
    'probability_density',
    'weighting_distribution',
    'cumulative_density',
    'transformation_curve',
    'curve_to_lut',
    'identity_curve',
    'agcwd_curve',
]
