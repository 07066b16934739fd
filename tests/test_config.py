"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from geneloc_pipeline.config import load_config, load_config_with_overrides
from geneloc_pipeline.config.schema import PipelineConfig, PlotStyle

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "default.yaml"


def test_load_default_config():
    """Test loading the shipped default configuration."""
    config = load_config(DEFAULT_CONFIG)

    assert isinstance(config, PipelineConfig)
    assert config.annotation.backend == "biomart"
    assert config.api.max_retries == 5
    assert config.plots.karyoplot_width_cm == 14
    assert config.plots.circos_height_cm == 5
    assert config.plots.point_size == 6
    assert config.plots.fallback_dpi == 300


def test_missing_config_file_raises(tmp_path):
    """Test that a nonexistent path raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_invalid_backend_rejected(tmp_path):
    """Test that an unknown annotation backend fails validation."""
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(f"""
cache_dir: {tmp_path / "cache"}
annotation:
  backend: ucsc
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(config_path)

    assert "backend" in str(exc_info.value)


def test_invalid_marker_height_rejected(tmp_path):
    """Test that marker_r1 above 1.0 fails validation."""
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(f"""
cache_dir: {tmp_path / "cache"}
plots:
  marker_r1: 1.5
""")

    with pytest.raises(ValidationError):
        load_config(config_path)


def test_cache_dir_created(tmp_path):
    """Test that validation creates the cache directory."""
    cache_dir = tmp_path / "nested" / "cache"

    PipelineConfig(cache_dir=cache_dir)

    assert cache_dir.is_dir()


def test_overrides_nested_key(config_file):
    """Test that dotted override keys update nested sections."""
    config = load_config_with_overrides(
        config_file, {"annotation.backend": "mygene", "api.timeout_seconds": 10}
    )

    assert config.annotation.backend == "mygene"
    assert config.api.timeout_seconds == 10
    assert config.api.max_retries == 3


def test_overrides_skip_none(config_file):
    """Test that None override values leave the config untouched."""
    config = load_config_with_overrides(config_file, {"annotation.backend": None})

    assert config.annotation.backend == "biomart"


def test_config_hash_changes_with_values(tmp_path):
    """Test that the config hash is deterministic and value-sensitive."""
    a = PipelineConfig(cache_dir=tmp_path / "cache")
    b = PipelineConfig(cache_dir=tmp_path / "cache")
    c = PipelineConfig(
        cache_dir=tmp_path / "cache", plots=PlotStyle(point_size=8)
    )

    assert a.config_hash() == b.config_hash()
    assert a.config_hash() != c.config_hash()


def test_plot_style_figsize_in_inches():
    """Test that canvas sizes convert from centimeters to inches."""
    style = PlotStyle()

    width, height = style.karyoplot_figsize()
    assert width == pytest.approx(14 / 2.54)
    assert height == pytest.approx(10 / 2.54)
    assert style.circos_figsize() == pytest.approx((5 / 2.54, 5 / 2.54))


def test_plot_style_rc_params():
    """Test that rc params carry font size and background."""
    params = PlotStyle().rc_params()

    assert params["font.size"] == 6
    assert params["font.sans-serif"][0] == "Arial"
    assert params["savefig.facecolor"] == "white"
