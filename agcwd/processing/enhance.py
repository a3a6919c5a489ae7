"""
Enhancement Driver - AGCWD contrast enhancement of 8-bit pixel buffers

Runs the AGCWD pipeline on a caller-owned buffer and rewrites it in place:

    brightness histogram -> PDF -> weighted PDF -> CDF -> curve -> pixels

For packed RGB/RGBA pixels the HSV value channel is remapped and hue and
saturation are kept; for planar YUV only the luma plane is remapped.

Usage:
    from agcwd.processing.enhance import enhance_rgb, Agcwd

    buf = bytearray(raw_rgb_bytes)
    enhance_rgb(buf, {"alpha": 0.5})

    agcwd = Agcwd(alpha=0.3, fusion=0.25)
    agcwd.enhance_rgba_image(rgba_bytes)
"""

import logging
import time
from typing import Any, Mapping, Optional, Union

from numpy.typing import NDArray

from .intensity import histogram, merge_histograms, agcwd_curve
from .pixel_view import PixelView, RgbView, RgbaView, PlanarLumaView, view_for_array
from ..options import AgcwdOptions

logger = logging.getLogger(__name__)

OptionsLike = Union[AgcwdOptions, Mapping[str, Any], None]


def _resolve_options(options: OptionsLike) -> AgcwdOptions:
    if isinstance(options, AgcwdOptions):
        return options
    return AgcwdOptions.from_mapping(options)


class Agcwd:
    """
    Adaptive Gamma Correction with Weighting Distribution.

    Holds the enhancement options; every ``enhance_*`` call builds its tables
    from the current buffer contents and keeps nothing afterwards.
    """

    def __init__(self, options: OptionsLike = None, **overrides):
        base = _resolve_options(options)
        if overrides:
            base = AgcwdOptions.from_mapping({**base.to_dict(), **overrides})
        self.options = base

    def __repr__(self) -> str:
        return f"Agcwd({self.options!r})"

    def curve_for(self, view: PixelView) -> NDArray:
        """Build the normalized intensity transformation curve for a view."""
        chunk_pixels = self.options.chunk_pixels
        hist = merge_histograms(
            histogram(brightness) for brightness in view.iter_brightness(chunk_pixels)
        )
        return agcwd_curve(hist, self.options.alpha)

    def enhance_view(self, view: PixelView) -> NDArray:
        """
        Enhance the pixels behind ``view`` in place.

        Returns:
            The curve that was applied.
        """
        start = time.perf_counter()
        curve = self.curve_for(view)
        view.rewrite(curve, fusion=self.options.fusion, chunk_pixels=self.options.chunk_pixels)
        elapsed = time.perf_counter() - start
        logger.debug(
            f"Enhanced {view.pixel_count} {view.kind} pixels "
            f"(alpha={self.options.alpha}, fusion={self.options.fusion}) in {elapsed:.4f}s"
        )
        return curve

    def enhance_rgb_image(self, buffer) -> None:
        """Enhance interleaved RGB bytes in place."""
        self.enhance_view(RgbView.from_buffer(buffer))

    def enhance_rgba_image(self, buffer) -> None:
        """Enhance interleaved RGBA bytes in place, leaving alpha untouched."""
        self.enhance_view(RgbaView.from_buffer(buffer))

    def enhance_planar_luma(self, buffer, width: int, height: Optional[int] = None) -> None:
        """Enhance the luma plane of a planar YUV buffer in place."""
        self.enhance_view(PlanarLumaView.from_buffer(buffer, width, height))

    def enhance_image(self, image: NDArray) -> NDArray:
        """
        Enhance a decoded (H, W, 3) or (H, W, 4) uint8 array in place.

        Returns:
            The same array, for chaining.
        """
        self.enhance_view(view_for_array(image))
        return image


def enhance_rgb(buffer, options: OptionsLike = None) -> None:
    """
    Enhance interleaved 8-bit RGB pixels in place.

    Parameters
    ----------
    buffer : bytearray, memoryview or np.ndarray
        Writable buffer whose length is a multiple of 3.
    options : AgcwdOptions or mapping, optional
        Enhancement options (``alpha``, ``fusion``, ``chunk_pixels``).

    Examples
    --------
    >>> buf = bytearray([0, 1, 2, 3, 4, 5])
    >>> enhance_rgb(buf)
    >>> list(buf)
    [0, 11, 23, 153, 204, 255]
    """
    Agcwd(options).enhance_rgb_image(buffer)


def enhance_rgba(buffer, options: OptionsLike = None) -> None:
    """
    Enhance interleaved 8-bit RGBA pixels in place.

    Every 4th byte (alpha) is left unmodified.
    """
    Agcwd(options).enhance_rgba_image(buffer)


def enhance_planar_luma(buffer, width: int, options: OptionsLike = None,
                        height: Optional[int] = None) -> None:
    """
    Enhance the luma plane of a planar YUV buffer in place.

    Parameters
    ----------
    buffer : bytearray, memoryview or np.ndarray
        Writable planar buffer, Y plane first.
    width : int
        Frame width in pixels.
    options : AgcwdOptions or mapping, optional
        Enhancement options.
    height : int, optional
        Frame height. If omitted the buffer must be a complete I420 frame.
    """
    Agcwd(options).enhance_planar_luma(buffer, width, height)


def enhance_image(image: NDArray, options: OptionsLike = None) -> NDArray:
    """Enhance a decoded RGB or RGBA uint8 image array in place and return it."""
    return Agcwd(options).enhance_image(image)


__all__ = [
    'Agcwd',
    'enhance_rgb',
    'enhance_rgba',
    'enhance_planar_luma',
    'enhance_image',
]
