from pathlib import Path

import pytest

from dynview.config import DEFAULT_LAYOUT_CONFIG, LayoutConfig, get_settings, load_settings, reload_settings
from dynview.exceptions import ConfigurationError


def test_defaults_match_layout_constants():
    settings = load_settings()

    assert settings.layout_config == DEFAULT_LAYOUT_CONFIG
    assert settings.output_dir == Path("renders")
    assert settings.render_dpi == 150
    assert settings.log_level == "INFO"


def test_layout_config_is_built_from_layout_fields():
    settings = load_settings(layout_min_node_width=200, layout_row_pitch=24)
    config = settings.layout_config

    assert isinstance(config, LayoutConfig)
    assert config.min_node_width == 200
    assert config.row_pitch == 24
    assert config.title_char_width == DEFAULT_LAYOUT_CONFIG.title_char_width


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DYNVIEW_LAYOUT_MIN_CURVE_OFFSET", "75")
    monkeypatch.setenv("DYNVIEW_RENDER_DPI", "96")
    monkeypatch.setenv("DYNVIEW_OUTPUT_DIR", "out/images")

    settings = reload_settings()

    assert settings.layout_config.min_curve_offset == 75
    assert settings.render_config["dpi"] == 96
    assert settings.output_dir == Path("out/images")


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("DYNVIEW_RENDER_DPI", "300")

    assert get_settings() is first
    assert reload_settings().render_dpi == 300


def test_log_level_is_normalized():
    assert load_settings(log_level="debug").log_level == "DEBUG"
    assert load_settings(log_level="warning").logging_config["level"] == "WARNING"


@pytest.mark.parametrize("overrides", [
    {"log_level": "chatty"},
    {"render_dpi": 0},
    {"layout_row_pitch": 0},
    {"layout_min_node_width": -10},
    {"layout_header_offset": -1},
    {"render_margin": -5},
])
def test_invalid_values_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        load_settings(**overrides)


def test_zero_offsets_are_allowed():
    settings = load_settings(layout_content_allowance=0, layout_min_curve_offset=0)

    assert settings.layout_config.content_allowance == 0
    assert settings.layout_config.min_curve_offset == 0


def test_layout_config_round_trips_to_dict():
    values = DEFAULT_LAYOUT_CONFIG.to_dict()

    assert values["row_pitch"] == 20
    assert LayoutConfig(**values) == DEFAULT_LAYOUT_CONFIG
