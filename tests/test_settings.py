import logging

import pytest

from errors import ConfigurationError
from settings import EngineConfig


def test_documented_defaults():
    config = EngineConfig()
    assert config.particle_count == 10
    assert (config.min_radius, config.max_radius) == (2, 5)
    assert (config.min_speed, config.max_speed) == (0.5, 1)
    assert config.min_distance == 200
    assert config.full_opacity_distance == 150
    assert config.mouse_min_proximity == 100
    assert config.initial_mode == "neutral"
    config.validate()


def test_from_dict_overrides_and_warns_on_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        config = EngineConfig.from_dict({"particle_count": 3, "min_distance": 120, "full_opacity_distance": 60, "colour": "red"})

    assert config.particle_count == 3
    assert config.min_distance == 120
    assert "colour" in caplog.text


def test_config_is_immutable():
    config = EngineConfig()
    with pytest.raises(AttributeError):
        config.particle_count = 4


@pytest.mark.parametrize("overrides", [
    {"particle_count": -1},
    {"min_radius": 0},
    {"max_radius": -2},
    {"min_radius": 6, "max_radius": 5},
    {"min_speed": 0},
    {"min_speed": 2, "max_speed": 1},
    {"min_distance": 0, "full_opacity_distance": 0},
    {"full_opacity_distance": 200},
    {"full_opacity_distance": 250},
    {"full_opacity_distance": -1},
    {"mouse_min_proximity": -5},
    {"initial_mode": "orbit"},
    {"stroke_width": -1},
    {"log_throttle_frames": 0},
])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        EngineConfig.from_dict(overrides)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        EngineConfig(full_opacity_distance=300).validate()


@pytest.mark.parametrize("overrides", [
    {"particle_count": 10.5},
    {"particle_count": "10"},
    {"particle_count": True},
    {"stroke_width": 1.5},
    {"log_throttle_frames": None},
    {"min_radius": "2"},
    {"max_speed": None},
    {"min_distance": [200]},
    {"seed": "abc"},
])
def test_wrong_types_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        EngineConfig.from_dict(overrides)


def test_integral_floats_are_accepted_for_ranges():
    config = EngineConfig.from_dict({"min_radius": 2, "max_radius": 5.5, "min_distance": 180})
    assert config.max_radius == 5.5
