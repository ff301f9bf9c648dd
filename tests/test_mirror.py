import random

import pytest

from imgtoy.mirror import Mirror, MirrorDirection, MirrorLine
from imgtoy.value import ConfigError


@pytest.fixture
def rng():
    return random.Random(3)


def test_absent_mirror_is_none():
    assert Mirror.from_value({"blur": {}}) is None


def test_directions_required():
    with pytest.raises(ConfigError):
        Mirror.from_value({"mirror": {"chance": 0.0}})


def test_directions_must_be_list():
    with pytest.raises(ConfigError):
        Mirror.from_value({"mirror": {"directions": "vertical"}})


def test_direction_sets_must_be_lists():
    with pytest.raises(ConfigError):
        Mirror.from_value({"mirror": {"directions": ["vertical"]}})


def test_unknown_direction_raises():
    with pytest.raises(ConfigError):
        Mirror.from_value({"mirror": {"directions": [["sideways"]]}})


def test_default_chances_apply_all_lines(rng):
    mirror = Mirror.from_value({"mirror": {"directions": [["vertical", "upright"]]}})
    assert mirror.to_tool(rng) == [
        MirrorLine(MirrorDirection.VERTICAL, True, True),
        MirrorLine(MirrorDirection.UPRIGHT, True, True),
    ]


def test_full_chance_yields_nothing(rng):
    mirror = Mirror.from_value(
        {"mirror": {"chance": 1.0, "directions": [["horizontal"]]}}
    )
    assert all(mirror.to_tool(rng) == [] for _ in range(20))


def test_full_flip_chance_never_flips(rng):
    mirror = Mirror.from_value(
        {"mirror": {"flip": 1.0, "directions": [["downright"]]}}
    )
    lines = mirror.to_tool(rng)
    assert [line.flip for line in lines] == [False]
    assert [line.direction for line in lines] == [MirrorDirection.DOWNRIGHT]


def test_chosen_set_is_one_of_configured(rng):
    sets = [["vertical"], ["horizontal", "downright"]]
    mirror = Mirror.from_value({"mirror": {"directions": sets}})
    expected = [[MirrorDirection(d) for d in s] for s in sets]
    for _ in range(20):
        assert [line.direction for line in mirror.to_tool(rng)] in expected


def test_empty_direction_list_raises_on_use(rng):
    mirror = Mirror.from_value({"mirror": {"directions": []}})
    with pytest.raises(ConfigError):
        mirror.to_tool(rng)