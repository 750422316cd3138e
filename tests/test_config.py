"""Tests for host configuration."""

import argparse

import pytest
from chipvm.config import HostConfig, add_config_arguments


def test_defaults():
    config = HostConfig()
    assert config.instructions_per_frame == 10
    assert config.fps == 60
    assert config.instruction_frequency == 600


@pytest.mark.parametrize("kwargs", [
    {"scale": 0},
    {"instructions_per_frame": 0},
    {"fps": 0},
    {"color_scheme": "sepia"},
    {"volume": 1.5},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        HostConfig(**kwargs)


def test_asdict():
    assert HostConfig(seed=3).asdict()["seed"] == 3


def test_from_args():
    parser = argparse.ArgumentParser()
    parser.add_argument("rom")
    add_config_arguments(parser)

    args = parser.parse_args(["game.ch8", "--ipf", "20", "--color-scheme", "amber", "--seed", "4"])
    config = HostConfig.from_args(args)

    assert config.instructions_per_frame == 20
    assert config.color_scheme == "amber"
    assert config.seed == 4
    assert config.scale == HostConfig().scale


def test_config_is_frozen():
    config = HostConfig()
    with pytest.raises(AttributeError):
        config.scale = 2
