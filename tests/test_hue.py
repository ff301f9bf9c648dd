import math
import random

import pytest

from imgtoy.hue import (
    HueDistribution,
    HueStrategies,
    HueStrategy,
    HueStrategyKind,
    generate_hue_neighbourhood,
)
from imgtoy.value import ConfigError


@pytest.fixture
def rng():
    return random.Random(99)


def test_linear_neighbourhood_spans_range(rng):
    hue, size = 100.0, 10.0
    result = generate_hue_neighbourhood(hue, size, 3, HueDistribution.LINEAR, rng)
    assert result[0] == hue - size
    assert result[1] == hue
    assert result[-1] == hue + size


def test_linear_neighbourhood_keeps_negative_remainder(rng):
    size = 10.0
    result = generate_hue_neighbourhood(0.0, size, 2, HueDistribution.LINEAR, rng)
    assert result == [-size, size]


def test_linear_single_hue_is_nan(rng):
    result = generate_hue_neighbourhood(50.0, 5.0, 1, HueDistribution.LINEAR, rng)
    assert len(result) == 1 and math.isnan(result[0])


def test_random_neighbourhood_within_bounds(rng):
    hue, size = 200.0, 20.0
    result = generate_hue_neighbourhood(hue, size, 50, HueDistribution.RANDOM, rng)
    assert len(result) == 50
    assert all(hue - size <= h < hue + size for h in result)


def test_random_neighbourhood_zero_size_raises(rng):
    with pytest.raises(ConfigError):
        generate_hue_neighbourhood(10.0, 0.0, 2, HueDistribution.RANDOM, rng)


def test_cycle_documented_example(rng):
    strategy = HueStrategy.from_value({"type": "cycle", "count": 2})
    assert strategy.execute_with_seed_hue(0.0, rng) == [120.0, 240.0]


def test_contrast_centres_opposite(rng):
    strategy = HueStrategy.from_value(
        {"type": "contrast", "size": 0.0, "count": 2, "distribution": "linear"}
    )
    seed = 10.0
    result = strategy.execute_with_seed_hue(seed, rng)
    assert result[0] == seed + 180.0


def test_penpal_uses_distance(rng):
    strategy = HueStrategy.from_value(
        {
            "type": "penpal",
            "size": 5.0,
            "count": 3,
            "distribution": "linear",
            "distance": 90.0,
        }
    )
    assert strategy.kind is HueStrategyKind.PENPAL
    result = strategy.execute_with_seed_hue(0.0, rng)
    assert result[1] == 90.0


def test_execute_yields_count_hues(rng):
    strategy = HueStrategy.from_value(
        {"type": "neighbour", "size": 30.0, "count": 4, "distribution": "random"}
    )
    assert len(strategy.execute(rng)) == 4


def test_unknown_type_raises():
    with pytest.raises(ConfigError):
        HueStrategy.from_value({"type": "spiral", "count": 1})


def test_unknown_distribution_raises():
    with pytest.raises(ConfigError):
        HueStrategy.from_value(
            {"type": "neighbour", "size": 1.0, "count": 1, "distribution": "wobbly"}
        )


def test_missing_size_raises():
    with pytest.raises(ConfigError):
        HueStrategy.from_value({"type": "neighbour", "count": 1, "distribution": "linear"})


def test_strategies_require_list():
    with pytest.raises(ConfigError):
        HueStrategies.from_value({"type": "cycle"})


def test_strategies_share_seed(rng):
    strategies = HueStrategies.from_value(
        [
            {"type": "neighbour", "size": 10.0, "count": 3, "distribution": "random"},
            {"type": "cycle", "count": 2},
        ]
    )
    hues = strategies.generate_hues(rng)
    assert len(hues) == 5
    assert hues[4] - hues[3] == pytest.approx(120.0)