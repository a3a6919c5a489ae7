import os
from dataclasses import dataclass

import numpy as np
from skimage import io

# Channel count -> color type name
_COLOR_TYPES = {3: "rgb", 4: "rgba"}


@dataclass
class ImageData:
    """Container for a decoded 8-bit image."""
    pixels: np.ndarray        # (H, W, C) uint8, C-contiguous
    color_type: str           # "rgb" or "rgba"
    filepath: str = ""        # Source file path, empty for in-memory images

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def bit_depth(self) -> int:
        return self.pixels.dtype.itemsize * 8


def load(path: str) -> ImageData:
    """
    Loads a PNG file into an ImageData ready for in-place enhancement.

    Only 8-bit RGB and RGBA images are accepted; grayscale and 16-bit images
    are rejected.

    Args:
        path (str): Path to the .png file.

    Returns:
        ImageData: Decoded pixels and format metadata.

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be decoded.
        ValueError: If the bit depth or color type is unsupported.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    try:
        pixels = io.imread(path)
    except Exception as e:
        raise IOError(f"Failed to read image {path}: {e}")

    if pixels.dtype != np.uint8:
        raise ValueError(
            f"Unsupported bit depth in {os.path.basename(path)}: "
            f"{pixels.dtype.itemsize * 8} (only 8-bit channels are supported)"
        )

    channels = pixels.shape[2] if pixels.ndim == 3 else 1
    if pixels.ndim != 3 or channels not in _COLOR_TYPES:
        raise ValueError(
            f"Unsupported color type in {os.path.basename(path)}: "
            f"{channels} channel(s), expected RGB or RGBA"
        )

    return ImageData(
        pixels=np.ascontiguousarray(pixels),
        color_type=_COLOR_TYPES[channels],
        filepath=os.path.abspath(path),
    )


def save(path: str, image: ImageData) -> str:
    """
    Writes an ImageData to a PNG file.

    Args:
        path (str): Destination path.
        image (ImageData): Image to encode.

    Returns:
        str: Absolute path of the written file.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    io.imsave(path, image.pixels, check_contrast=False)
    return os.path.abspath(path)
