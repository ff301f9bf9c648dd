import random

import pytest

from imgtoy.checker import Checker, CheckerIter
from imgtoy.value import Chance, ConfigError, ValueProperty


@pytest.fixture
def rng():
    return random.Random(11)


def test_absent_checker_is_none():
    assert Checker.from_value({"other": 1}) is None


def test_default_chance_is_half():
    checker = Checker.from_value({"checker": {"type": "iter", "iter": 2}})
    assert checker.chance == Chance(ValueProperty("fixed", (0.5,), "f64"))
    assert checker.kind == CheckerIter(ValueProperty("fixed", (2,), "usize"))


def test_iter_tool_when_chance_zero(rng):
    checker = Checker.from_value({"checker": {"type": "iter", "iter": 3, "chance": 0.0}})
    assert checker.to_tool(rng) == ("iter", 3)


def test_chance_one_never_applies(rng):
    checker = Checker.from_value({"checker": {"type": "iter", "iter": 3, "chance": 1.0}})
    assert all(checker.to_tool(rng) is None for _ in range(20))


def test_from_center_linear_with_modulo(rng):
    checker = Checker.from_value(
        {
            "checker": {
                "type": "from",
                "chance": 0.0,
                "from": {
                    "source": {"type": "center"},
                    "factor": {"type": "linear"},
                    "modulo": 4,
                },
            }
        }
    )
    assert checker.to_tool(rng) == ("from", "center", "linear", 4)


def test_from_fixed_source(rng):
    checker = Checker.from_value(
        {
            "checker": {
                "type": "from",
                "chance": 0.0,
                "from": {
                    "source": {"type": "fixed", "fixed": {"x": 2, "y": 3}},
                    "factor": {"type": "linear"},
                },
            }
        }
    )
    assert checker.to_tool(rng) == ("from", (2, 3), "linear", None)


def test_exponential_factor_within_range(rng):
    checker = Checker.from_value(
        {
            "checker": {
                "type": "from",
                "chance": 0.0,
                "from": {
                    "source": {"type": "center"},
                    "factor": {"type": "exponential", "min": 1.0, "max": 2.0},
                },
            }
        }
    )
    for _ in range(10):
        _, _, (name, exponent), _ = checker.to_tool(rng)
        assert name == "exponential"
        assert 1.0 <= exponent < 2.0


def test_unknown_kind_raises():
    with pytest.raises(ConfigError):
        Checker.from_value({"checker": {"type": "spiral"}})


def test_iter_requires_count():
    with pytest.raises(ConfigError):
        Checker.from_value({"checker": {"type": "iter"}})


def test_unknown_source_raises():
    with pytest.raises(ConfigError):
        Checker.from_value(
            {
                "checker": {
                    "type": "from",
                    "from": {"source": {"type": "corner"}, "factor": {"type": "linear"}},
                }
            }
        )


def test_unknown_factor_raises():
    with pytest.raises(ConfigError):
        Checker.from_value(
            {
                "checker": {
                    "type": "from",
                    "from": {"source": {"type": "center"}, "factor": {"type": "cubic"}},
                }
            }
        )