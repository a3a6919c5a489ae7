"""
AGCWD Loaders Package.

Image codecs that hand raw 8-bit pixel buffers to the enhancement core:
- PNG (RGB, RGBA) via scikit-image

Loaders return ImageData holding a C-contiguous uint8 array that the
enhancement functions can modify in place.
"""

from .load_png_data import ImageData
from .load_png_data import load as load_png
from .load_png_data import save as save_png

__all__ = [
    "ImageData",
    "load_png",
    "save_png",
]
