"""Tests for option validation and the JSON options file."""
import json

import numpy as np
import pytest

from agcwd.options import AgcwdOptions, load_options, save_options, get_options_path, FUSION_ON_WEIGHT
from agcwd.utils.constants import DEFAULT_ALPHA, DEFAULT_CHUNK_PIXELS


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point ~ at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("AGCWD_CONFIG_DIR", raising=False)
    return tmp_path


def test_defaults():
    options = AgcwdOptions()
    assert options.alpha == DEFAULT_ALPHA
    assert options.fusion == 0.0
    assert not options.fusion_enabled
    assert options.chunk_pixels == DEFAULT_CHUNK_PIXELS


@pytest.mark.parametrize("fusion,expected", [
    (False, 0.0),
    (True, FUSION_ON_WEIGHT),
    (0, 0.0),
    (0.3, 0.3),
    (1, 1.0),
    (None, 0.0),
])
def test_fusion_accepts_bool_or_weight(fusion, expected):
    assert AgcwdOptions(fusion=fusion).fusion == expected


@pytest.mark.parametrize("values", [
    {"alpha": 0},
    {"alpha": 1.01},
    {"fusion": -0.1},
    {"fusion": 1.5},
    {"chunk_pixels": 0},
    {"chunk_pixels": True},
    {"chunk_pixels": 2.5},
    {"chunk_pixels": "8"},
])
def test_invalid_values_rejected(values):
    with pytest.raises(ValueError):
        AgcwdOptions.from_mapping(values)


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown option"):
        AgcwdOptions.from_mapping({"alpha": 0.5, "beta": 1})


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(ValueError):
        AgcwdOptions.from_mapping([("alpha", 0.5)])


def test_from_mapping_none_values_keep_defaults():
    options = AgcwdOptions.from_mapping({"alpha": None, "fusion": 0.2})
    assert options.alpha == DEFAULT_ALPHA
    assert options.fusion == 0.2


def test_missing_default_file_gives_defaults(fake_home):
    assert not get_options_path().exists()
    assert load_options() == AgcwdOptions()


def test_save_and_load_default_location(fake_home):
    """Options persist to ~/.agcwd/options.json."""
    path = save_options(AgcwdOptions(alpha=0.25, fusion=0.1))

    assert path == fake_home / ".agcwd" / "options.json"
    assert load_options() == AgcwdOptions(alpha=0.25, fusion=0.1)


def test_load_explicit_path(tmp_path):
    path = tmp_path / "opts.json"
    path.write_text(json.dumps({"alpha": 0.8}), encoding="utf-8")
    assert load_options(path).alpha == 0.8


def test_load_explicit_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_options(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "opts.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


def test_chunk_pixels_accepts_numpy_integers():
    """Integral values of any integer type are kept, floats are not truncated."""
    assert AgcwdOptions(chunk_pixels=np.int32(64)).chunk_pixels == 64
    with pytest.raises(ValueError, match="chunk_pixels"):
        AgcwdOptions(chunk_pixels=64.0)


def test_config_dir_env_override(tmp_path, monkeypatch):
    """$AGCWD_CONFIG_DIR relocates the options file."""
    config_dir = tmp_path / "elsewhere"
    monkeypatch.setenv("AGCWD_CONFIG_DIR", str(config_dir))

    save_options(AgcwdOptions(alpha=0.7))

    assert get_options_path() == config_dir / "options.json"
    assert load_options().alpha == 0.7
