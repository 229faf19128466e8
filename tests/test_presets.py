"""
Tests for analysis configuration and presets
"""

import pytest

from cryptoscope.core.presets import AnalysisConfig, PresetLibrary


def test_defaults_match_baseline():
    config = AnalysisConfig()
    assert config.key_sizes == range(2, 40)
    assert config.key_size_candidates == 1
    assert config.block_size == 16
    assert config.text_encoding == "utf-8"


def test_every_listed_preset_exists():
    for name in PresetLibrary.list_presets():
        preset = PresetLibrary.get_preset(name)
        assert preset is not None
        assert preset.name == name


def test_preset_lookup_is_case_insensitive():
    assert PresetLibrary.get_preset("THOROUGH").key_size_candidates == 3
    assert PresetLibrary.get_preset("missing") is None


def test_preset_keyword_applies_values():
    config = AnalysisConfig(preset="exhaustive")
    assert config.key_sizes == range(1, 65)
    assert config.key_size_candidates == 5


def test_from_preset_with_overrides():
    config = AnalysisConfig.from_preset("thorough", key_size_candidates=4, block_size=8)
    assert config.preset == "thorough"
    assert config.key_size_candidates == 4
    assert config.block_size == 8


@pytest.mark.parametrize("overrides", [
    {"block_size": 0},
    {"key_size_candidates": 0},
    {"key_size_min": 0},
    {"key_size_max": 2},
])
def test_from_preset_validates_overrides(overrides):
    with pytest.raises(ValueError):
        AnalysisConfig.from_preset("baseline", **overrides)


def test_from_preset_override_equal_to_default_is_kept():
    config = AnalysisConfig.from_preset("thorough", key_size_candidates=1)
    assert config.key_size_candidates == 1


def test_explicit_values_win_over_preset():
    config = AnalysisConfig(preset="thorough", key_size_max=64)
    assert config.key_sizes == range(2, 64)
    assert config.key_size_candidates == 3


def test_preset_fills_only_default_fields():
    config = AnalysisConfig(preset="exhaustive", key_size_candidates=2)
    assert config.key_sizes == range(1, 65)
    assert config.key_size_candidates == 2


def test_from_preset_unknown_name():
    with pytest.raises(ValueError):
        AnalysisConfig.from_preset("nonexistent")


def test_from_preset_unknown_override():
    with pytest.raises(ValueError):
        AnalysisConfig.from_preset("baseline", colour="blue")


@pytest.mark.parametrize("kwargs", [
    {"key_size_min": 0},
    {"key_size_min": 10, "key_size_max": 10},
    {"key_size_candidates": 0},
    {"block_size": 0},
    {"preset": "nonexistent"},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        AnalysisConfig(**kwargs)
