"""
AGCWD - Adaptive Gamma Correction with Weighting Distribution

Contrast enhancement for 8-bit RGB, RGBA and planar YUV images, applied in
place to caller-owned buffers.

Usage:
    from agcwd import enhance_rgb, enhance_rgba, enhance_planar_luma

    buf = bytearray(rgb_bytes)
    enhance_rgb(buf, {"alpha": 0.5})
"""

from .processing import (
    Agcwd,
    enhance_rgb,
    enhance_rgba,
    enhance_planar_luma,
    enhance_image,
    agcwd_curve,
    curve_to_lut,
)

from .options import (
    AgcwdOptions,
    load_options,
    save_options,
)

__all__ = [
    'Agcwd',
    'AgcwdOptions',
    'enhance_rgb',
    'enhance_rgba',
    'enhance_planar_luma',
    'enhance_image',
    'agcwd_curve',
    'curve_to_lut',
    'load_options',
    'save_options',
]

__version__ = '1.0.0'
