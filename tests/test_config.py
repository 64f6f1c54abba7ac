"""Tests for DetectionConfig, ReadingDirection and presets."""

import dataclasses

import pytest

from comicpanels.config import PRESETS, DetectionConfig, ReadingDirection


def test_defaults():
    config = DetectionConfig()
    assert config.edge_threshold == 50
    assert config.min_gutter_ratio == 0.6
    assert config.min_panel_size == 100
    assert config.min_panel_area_ratio == 0.02
    assert config.max_panel_area_ratio == 0.95
    assert config.margin_pixels == 20
    assert config.gutter_padding == 5.0
    assert config.merge_overlap_threshold == 0.3
    assert config.dilation_size == 3
    assert config.debug is False


def test_config_is_immutable():
    config = DetectionConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.edge_threshold = 10


def test_replace_returns_new_instance():
    config = DetectionConfig()
    tuned = config.replace(edge_threshold=80, debug=True)
    assert tuned.edge_threshold == 80
    assert tuned.debug is True
    assert config.edge_threshold == 50


def test_dict_round_trip_ignores_unknown_keys():
    config = DetectionConfig(min_panel_size=64, gutter_padding=2.5)
    data = config.to_dict()
    data["obsolete_option"] = 1
    assert DetectionConfig.from_dict(data) == config


def test_reading_direction_rtl_flag():
    assert ReadingDirection.RIGHT_TO_LEFT.rtl
    assert not ReadingDirection.LEFT_TO_RIGHT.rtl


def test_presets():
    config, direction = PRESETS["Manga"]
    assert isinstance(config, DetectionConfig)
    assert direction is ReadingDirection.RIGHT_TO_LEFT
    assert PRESETS["Franco-Belge"][1] is ReadingDirection.LEFT_TO_RIGHT
