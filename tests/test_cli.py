"""Tests for the PNG loader and the agcwd-enhance command-line tool."""
import json

import numpy as np
import pytest
from skimage import io

from agcwd.cli import main
from agcwd.loaders import load_png, save_png, ImageData
from agcwd.processing.enhance import enhance_image
from agcwd.utils.path_utils import has_png_signature, png_output_path


@pytest.fixture(autouse=True)
def fake_home(tmp_path, monkeypatch):
    """Keep the user's ~/.agcwd/options.json out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("AGCWD_CONFIG_DIR", raising=False)
    return home


def _gradient(channels=3, height=16, width=32):
    image = np.zeros((height, width, channels), dtype=np.uint8)
    ramp = np.linspace(20, 120, width).astype(np.uint8)
    image[..., 0] = ramp
    image[..., 1] = ramp // 2
    image[..., 2] = 40
    if channels == 4:
        image[..., 3] = np.arange(width, dtype=np.uint8) * 8
    return image


def _write_png(path, image):
    io.imsave(str(path), image, check_contrast=False)
    return path


def test_load_png_rgb(tmp_path):
    path = _write_png(tmp_path / "in.png", _gradient())
    image = load_png(str(path))

    assert isinstance(image, ImageData)
    assert (image.width, image.height) == (32, 16)
    assert image.color_type == "rgb"
    assert image.bit_depth == 8
    assert image.pixels.flags.c_contiguous


def test_load_png_rgba(tmp_path):
    path = _write_png(tmp_path / "in.png", _gradient(channels=4))
    assert load_png(str(path)).color_type == "rgba"


def test_load_png_rejects_grayscale(tmp_path):
    path = _write_png(tmp_path / "gray.png", np.full((8, 8), 100, dtype=np.uint8))
    with pytest.raises(ValueError, match="color type"):
        load_png(str(path))


def test_load_png_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_png(str(tmp_path / "nope.png"))


def test_load_png_undecodable(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png")
    with pytest.raises(IOError):
        load_png(str(path))


def test_save_png_round_trip(tmp_path):
    original = _gradient(channels=4)
    out = save_png(str(tmp_path / "sub" / "out.png"), ImageData(original.copy(), "rgba"))
    assert np.array_equal(load_png(out).pixels, original)


def test_cli_enhances_png(tmp_path):
    """The CLI writes the same pixels as enhancing the array directly."""
    src = _write_png(tmp_path / "in.png", _gradient())
    dst = tmp_path / "out.png"

    assert main([str(src), "--output-path", str(dst), "--alpha", "0.4"]) == 0

    expected = enhance_image(_gradient(), {"alpha": 0.4})
    assert np.array_equal(load_png(str(dst)).pixels, expected)


def test_cli_keeps_alpha_channel(tmp_path):
    original = _gradient(channels=4)
    src = _write_png(tmp_path / "in.png", original)
    dst = tmp_path / "out.png"

    assert main([str(src), "--output-path", str(dst)]) == 0

    result = load_png(str(dst)).pixels
    assert np.array_equal(result[..., 3], original[..., 3])
    assert not np.array_equal(result[..., :3], original[..., :3])


def test_cli_reads_options_file(tmp_path):
    """--config supplies defaults that the command line can override."""
    config = tmp_path / "opts.json"
    config.write_text(json.dumps({"alpha": 0.3, "fusion": 1.0}), encoding="utf-8")
    src = _write_png(tmp_path / "in.png", _gradient())
    dst = tmp_path / "out.png"

    # fusion 1.0 from the file keeps the original
    assert main([str(src), "--output-path", str(dst), "--config", str(config)]) == 0
    assert np.array_equal(load_png(str(dst)).pixels, _gradient())

    # overriding fusion on the command line enhances again
    assert main([str(src), "--output-path", str(dst), "--config", str(config), "--fusion", "0"]) == 0
    expected = enhance_image(_gradient(), {"alpha": 0.3})
    assert np.array_equal(load_png(str(dst)).pixels, expected)


def test_cli_rejects_grayscale(tmp_path):
    src = _write_png(tmp_path / "gray.png", np.full((8, 8), 100, dtype=np.uint8))
    assert main([str(src), "--output-path", str(tmp_path / "out.png")]) == 1
    assert not (tmp_path / "out.png").exists()


def test_cli_rejects_bad_alpha(tmp_path):
    src = _write_png(tmp_path / "in.png", _gradient())
    assert main([str(src), "--alpha", "0"]) == 1


def test_cli_missing_input(tmp_path):
    assert main([str(tmp_path / "missing.png")]) == 1


def test_cli_reports_enhancement_errors(tmp_path, monkeypatch):
    """A pixel buffer the driver rejects is logged and exits with 1."""
    src = _write_png(tmp_path / "in.png", _gradient())
    dst = tmp_path / "out.png"
    # Fortran-ordered pixels cannot be rewritten in place
    monkeypatch.setattr(
        "agcwd.cli.load_png",
        lambda path: ImageData(np.asfortranarray(_gradient()), "rgb", path),
    )

    assert main([str(src), "--output-path", str(dst)]) == 1
    assert not dst.exists()


def test_cli_appends_png_extension(tmp_path):
    src = _write_png(tmp_path / "in.png", _gradient())
    assert main([str(src), "--output-path", str(tmp_path / "result")]) == 0
    assert (tmp_path / "result.png").exists()


def test_has_png_signature(tmp_path):
    src = _write_png(tmp_path / "in.png", _gradient())
    fake = tmp_path / "fake.png"
    fake.write_bytes(b"GIF89a not a png")

    assert has_png_signature(str(src))
    assert not has_png_signature(str(fake))
    assert not has_png_signature(str(tmp_path / "missing.png"))


def test_png_output_path(tmp_path):
    assert png_output_path(str(tmp_path / "a")) == str(tmp_path / "a.png")
    assert png_output_path(str(tmp_path / "b.jpg")) == str(tmp_path / "b.jpg")
