"""
Pixel Views - Typed access to caller-owned 8-bit pixel buffers

A pixel view wraps a mutable byte buffer (``bytearray``, writable
``memoryview`` or C-contiguous ``numpy.uint8`` array) without copying it and
exposes the two capabilities the enhancement driver needs:

- ``iter_brightness``: per-pixel brightness values, chunk by chunk
- ``rewrite``: write every pixel back through a brightness remap curve

Three layouts are supported:

- ``RgbView``: interleaved R, G, B triples
- ``RgbaView``: interleaved R, G, B, A quads; the 4th byte is never written
- ``PlanarLumaView``: the Y plane of a planar YUV frame (e.g. I420)
"""

import logging
from dataclasses import dataclass
from typing import ClassVar, Iterator, Literal, Optional

import numpy as np
from numpy.typing import NDArray

from ..color import rgb_to_hsv_float, hsv_to_rgb_float
from ..utils.constants import MAX_LEVEL, DEFAULT_CHUNK_PIXELS

logger = logging.getLogger(__name__)

PixelFormat = Literal["rgb", "rgba", "planar_luma"]


# =============================================================================
# Helper Functions
# =============================================================================

def as_byte_array(buffer) -> NDArray:
    """
    Return a flat, writable uint8 view of ``buffer`` that shares its memory.

    Raises
    ------
    TypeError
        If the buffer is read-only, not bytes-like, or not made of 8-bit
        samples.
    ValueError
        If a numpy buffer is not C-contiguous (a flat view would be a copy).
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise TypeError(f"only 8-bit channels are supported, got dtype {buffer.dtype}")
        if not buffer.flags.writeable:
            raise TypeError("pixel buffer is read-only")
        if not buffer.flags.c_contiguous:
            raise ValueError("pixel buffer must be C-contiguous to be modified in place")
        return buffer.reshape(-1)

    try:
        view = memoryview(buffer)
    except TypeError:
        raise TypeError(f"expected a bytes-like object or numpy array, got {type(buffer).__name__}")
    if view.readonly:
        raise TypeError(f"pixel buffer is read-only ({type(buffer).__name__})")
    if view.itemsize != 1:
        raise TypeError(f"only 8-bit channels are supported, got item size {view.itemsize}")
    return np.frombuffer(view.cast("B"), dtype=np.uint8)


def _round_to_bytes(values: NDArray) -> NDArray:
    """Round float channel values half up and clamp to uint8."""
    return np.clip(np.floor(values + 0.5), 0, MAX_LEVEL).astype(np.uint8)


def _blend(enhanced: NDArray, original: NDArray, fusion: float) -> NDArray:
    """Blend enhanced channel values with the original ones."""
    if fusion <= 0.0:
        return enhanced
    return (1.0 - fusion) * enhanced + fusion * original.astype(np.float64)


# =============================================================================
# Views
# =============================================================================

@dataclass
class PixelView:
    """Base class for the supported buffer layouts."""
    pixels: NDArray           # uint8 view into the caller buffer, one row per pixel

    kind: ClassVar[PixelFormat]

    @property
    def pixel_count(self) -> int:
        return int(self.pixels.shape[0])

    def __len__(self) -> int:
        return self.pixel_count

    def chunks(self, chunk_pixels: int = DEFAULT_CHUNK_PIXELS) -> Iterator[NDArray]:
        """Yield consecutive writable slices of at most ``chunk_pixels`` pixels."""
        if chunk_pixels <= 0:
            raise ValueError(f"chunk_pixels must be positive, got {chunk_pixels}")
        for start in range(0, self.pixel_count, chunk_pixels):
            yield self.pixels[start:start + chunk_pixels]

    def iter_brightness(self, chunk_pixels: int = DEFAULT_CHUNK_PIXELS) -> Iterator[NDArray]:
        """Yield the brightness of every pixel as uint8 arrays, chunk by chunk."""
        for chunk in self.chunks(chunk_pixels):
            yield self._brightness(chunk)

    def rewrite(self, curve: NDArray, fusion: float = 0.0,
                chunk_pixels: int = DEFAULT_CHUNK_PIXELS) -> None:
        """
        Remap every pixel's brightness through ``curve`` in place.

        Parameters
        ----------
        curve : NDArray
            Normalized intensity transformation curve of length 256.
        fusion : float, optional
            Weight of the original pixel in the output, in [0, 1].
            Default is 0.0 (enhanced only).
        chunk_pixels : int, optional
            Number of pixels processed per step.
        """
        curve = np.asarray(curve, dtype=np.float64)
        for chunk in self.chunks(chunk_pixels):
            self._rewrite(chunk, curve, fusion)

    def _brightness(self, chunk: NDArray) -> NDArray:
        raise NotImplementedError

    def _rewrite(self, chunk: NDArray, curve: NDArray, fusion: float) -> None:
        raise NotImplementedError


@dataclass
class _PackedView(PixelView):
    """Interleaved layout whose first three bytes per pixel are R, G, B."""

    stride: ClassVar[int]

    @classmethod
    def from_buffer(cls, buffer) -> "_PackedView":
        data = as_byte_array(buffer)
        if data.size % cls.stride != 0:
            raise ValueError(
                f"{cls.kind} buffer length must be a multiple of {cls.stride}, got {data.size}"
            )
        if data.size == 0:
            raise ValueError(f"{cls.kind} buffer contains no pixels")
        return cls(pixels=data.reshape(-1, cls.stride))

    def _brightness(self, chunk: NDArray) -> NDArray:
        # HSV value channel, without a full HSV conversion
        return chunk[:, :3].max(axis=1)

    def _rewrite(self, chunk: NDArray, curve: NDArray, fusion: float) -> None:
        rgb = chunk[:, :3]
        hsv = rgb_to_hsv_float(rgb / MAX_LEVEL)
        hsv[:, 2] = curve[rgb.max(axis=1)]
        enhanced = hsv_to_rgb_float(hsv) * MAX_LEVEL
        chunk[:, :3] = _round_to_bytes(_blend(enhanced, rgb, fusion))


@dataclass
class RgbView(_PackedView):
    """Interleaved 8-bit R, G, B pixels."""
    kind: ClassVar[PixelFormat] = "rgb"
    stride: ClassVar[int] = 3


@dataclass
class RgbaView(_PackedView):
    """Interleaved 8-bit R, G, B, A pixels. Alpha is passed through."""
    kind: ClassVar[PixelFormat] = "rgba"
    stride: ClassVar[int] = 4


@dataclass
class PlanarLumaView(PixelView):
    """
    Luma (Y) plane at the start of a planar YUV buffer.

    Luma already is the brightness channel, so samples are remapped directly
    and the chroma planes that follow it are never touched.
    """
    width: int = 0
    height: int = 0

    kind: ClassVar[PixelFormat] = "planar_luma"

    @classmethod
    def from_buffer(cls, buffer, width: int, height: Optional[int] = None) -> "PlanarLumaView":
        """
        Wrap the luma plane of ``buffer``.

        When ``height`` is omitted the buffer must be a complete I420 frame
        (luma plane followed by two quarter-size chroma planes, 3/2 bytes per
        pixel). With an explicit ``height`` the buffer may hold just the luma
        plane or a complete I420 frame.
        """
        data = as_byte_array(buffer)
        width = int(width)
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if data.size == 0:
            raise ValueError("planar buffer contains no pixels")

        if height is None:
            if (data.size * 2) % 3 != 0 or (data.size * 2 // 3) % width != 0:
                raise ValueError(
                    f"buffer of {data.size} bytes is not an I420 frame of width {width}"
                )
            height = data.size * 2 // 3 // width
        else:
            height = int(height)
            if height <= 0:
                raise ValueError(f"height must be positive, got {height}")
            luma_size = width * height
            chroma_size = 2 * ((width + 1) // 2) * ((height + 1) // 2)
            if data.size not in (luma_size, luma_size + chroma_size):
                raise ValueError(
                    f"buffer of {data.size} bytes does not match a {width}x{height} "
                    f"luma plane ({luma_size}) or I420 frame ({luma_size + chroma_size})"
                )

        return cls(pixels=data[:width * height], width=width, height=height)

    def _brightness(self, chunk: NDArray) -> NDArray:
        return chunk

    def _rewrite(self, chunk: NDArray, curve: NDArray, fusion: float) -> None:
        enhanced = curve[chunk] * MAX_LEVEL
        chunk[:] = _round_to_bytes(_blend(enhanced, chunk, fusion))


def view_for_array(image: NDArray) -> PixelView:
    """
    Pick the pixel view matching a decoded image array.

    Parameters
    ----------
    image : NDArray
        uint8 array of shape (H, W, 3) or (H, W, 4).
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected numpy array, got {type(image)}")
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) array, got shape {image.shape}")
    if image.shape[2] == 3:
        return RgbView.from_buffer(image)
    return RgbaView.from_buffer(image)


__all__ = [
    'PixelFormat',
    'PixelView',
    'RgbView',
    'RgbaView',
    'PlanarLumaView',
    'as_byte_array',
    'view_for_array',
]
