"""
AGCWD Processing Module

Histogram-driven gamma curve construction and in-place application to
8-bit pixel buffers.

Usage:
    from agcwd.processing import enhance_rgb, agcwd_curve, histogram

    enhance_rgb(buf, {"alpha": 0.5})
"""

# intensity must load before enhance, which pulls in agcwd.options
from .intensity import (
    validate_alpha,
    histogram,
    merge_histograms,
    probability_density,
    weighting_distribution,
    cumulative_density,
    transformation_curve,
    curve_to_lut,
    identity_curve,
    agcwd_curve,
)

from .pixel_view import (
    PixelView,
    RgbView,
    RgbaView,
    PlanarLumaView,
    as_byte_array,
    view_for_array,
)

from .enhance import (
    Agcwd,
    enhance_rgb,
    enhance_rgba,
    enhance_planar_luma,
    enhance_image,
)

__all__ = [
    # Curve construction
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
    # Pixel views
    'PixelView',
    'RgbView',
    'RgbaView',
    'PlanarLumaView',
    'as_byte_array',
    'view_for_array',
    # Driver
    'Agcwd',
    'enhance_rgb',
    'enhance_rgba',
    'enhance_planar_luma',
    'enhance_image',
]
