"""Tests for the RGB/HSV/YUV converters in agcwd.color."""
import numpy as np
import pytest

from agcwd.color import (
    rgb_to_hsv,
    hsv_to_rgb,
    rgb_to_yuv,
    yuv_to_rgb,
    yuv_to_hsv,
    hsv_to_yuv,
    rgb_to_hsv_float,
    hsv_to_rgb_float,
)


def _assert_close(actual, expected, tolerance=2):
    for a, e in zip(actual, expected):
        assert abs(int(a) - int(e)) <= tolerance, f"{actual} not within ±{tolerance} of {expected}"


@pytest.mark.parametrize("rgb", [(255, 0, 0), (10, 30, 200), (222, 222, 222), (0, 133, 0), (0, 0, 0), (255, 130, 0)])
def test_rgb_hsv_round_trip(rgb):
    """Integer HSV round trip reproduces each channel within ±2."""
    h, s, v = rgb_to_hsv(*rgb)
    _assert_close(hsv_to_rgb(h, s, v), rgb)


def test_rgb_to_hsv_known_values():
    """Primary colors land on the expected hue sectors."""
    assert rgb_to_hsv(255, 0, 0) == (0, 255, 255)
    assert rgb_to_hsv(0, 133, 0) == (85, 255, 133)
    assert rgb_to_hsv(222, 222, 222) == (0, 0, 222)
    assert rgb_to_hsv(0, 0, 0) == (0, 0, 0)


def test_hsv_value_is_max_channel():
    """V is the maximum of the three channels."""
    _, _, v = rgb_to_hsv(10, 30, 200)
    assert v == 200


@pytest.mark.parametrize("rgb", [(255, 0, 0), (10, 30, 200), (222, 222, 222), (0, 133, 0)])
def test_rgb_yuv_round_trip(rgb):
    """BT.601 YUV round trip reproduces each channel within ±2."""
    y, u, v = rgb_to_yuv(*rgb)
    _assert_close(yuv_to_rgb(y, u, v), rgb)


def test_rgb_to_yuv_known_values():
    """Pure red maps to the studio-swing BT.601 coordinates."""
    assert rgb_to_yuv(255, 0, 0) == (82, 90, 239)
    assert yuv_to_rgb(82, 90, 239) == (254, 1, 0)


def test_yuv_to_rgb_clamps():
    """Out-of-gamut YUV values are clamped to [0, 255]."""
    assert yuv_to_rgb(255, 255, 255) == (255, 124, 255)
    assert yuv_to_rgb(0, 128, 128) == (0, 0, 0)


@pytest.mark.parametrize("yuv", [(83, 89, 79), (188, 128, 128), (124, 90, 55)])
def test_yuv_hsv_round_trip(yuv):
    """YUV -> HSV -> YUV reproduces each channel within ±2."""
    h, s, v = yuv_to_hsv(*yuv)
    _assert_close(hsv_to_yuv(h, s, v), yuv)


def test_array_inputs_return_uint8_arrays():
    """Converters accept arrays and keep their shape."""
    r = np.array([255, 10, 222], dtype=np.uint8)
    g = np.array([0, 30, 222], dtype=np.uint8)
    b = np.array([0, 200, 222], dtype=np.uint8)

    h, s, v = rgb_to_hsv(r, g, b)
    assert h.dtype == np.uint8 and h.shape == (3,)
    r2, g2, b2 = hsv_to_rgb(h, s, v)

    assert np.all(np.abs(r2.astype(int) - r) <= 2)
    assert np.all(np.abs(g2.astype(int) - g) <= 2)
    assert np.all(np.abs(b2.astype(int) - b) <= 2)
    # Matches the scalar path element by element
    assert (int(h[1]), int(s[1]), int(v[1])) == rgb_to_hsv(10, 30, 200)


def test_out_of_range_channel_rejected():
    """Channel values outside [0, 255] are a caller error."""
    with pytest.raises(ValueError):
        rgb_to_hsv(256, 0, 0)
    with pytest.raises(ValueError):
        rgb_to_yuv(-1, 0, 0)


def _rgb_planes(red):
    """All 65536 (green, blue) pairs for one red level, as int arrays."""
    g, b = np.meshgrid(np.arange(256), np.arange(256), indexing="ij")
    return np.full(g.size, red), g.ravel(), b.ravel()


def _max_error(actual, expected):
    return max(int(np.max(np.abs(a.astype(int) - e))) for a, e in zip(actual, expected))


def test_rgb_yuv_round_trip_every_triple():
    """YUV round trip stays within ±2 for every 8-bit RGB triple."""
    worst = 0
    for red in range(256):
        rgb = _rgb_planes(red)
        worst = max(worst, _max_error(yuv_to_rgb(*rgb_to_yuv(*rgb)), rgb))
    assert worst <= 2, f"YUV round trip off by {worst}"


def test_rgb_hsv_round_trip_every_triple():
    """Integer HSV round trip stays within ±4 and mostly within ±2."""
    worst = 0
    beyond_two = 0
    for red in range(256):
        rgb = _rgb_planes(red)
        back = hsv_to_rgb(*rgb_to_hsv(*rgb))
        errors = np.max([np.abs(a.astype(int) - e) for a, e in zip(back, rgb)], axis=0)
        worst = max(worst, int(errors.max()))
        beyond_two += int(np.count_nonzero(errors > 2))
    assert worst <= 4, f"HSV round trip off by {worst}"
    assert beyond_two < 0.02 * 256 ** 3, f"{beyond_two} triples beyond ±2"


def test_float_hsv_round_trip_any_triple():
    """Float HSV round trip rounds back to the original 8-bit triple."""
    rng = np.random.default_rng(0)
    rgb = rng.integers(0, 256, size=(5000, 3), dtype=np.uint8)

    hsv = rgb_to_hsv_float(rgb / 255.0)
    back = np.floor(hsv_to_rgb_float(hsv) * 255.0 + 0.5).astype(int)

    assert np.all(np.abs(back - rgb) <= 2)
    assert np.allclose(hsv[:, 2], rgb.max(axis=1) / 255.0)
