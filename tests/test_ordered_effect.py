import random

import pytest

from imgtoy.modifiers import RotationDirection
from imgtoy.ordered_effect import Ordered, OrderedDither
from imgtoy.strategies import StrategyKind
from imgtoy.value import ConfigError


def _palette():
    return {
        "config": {
            "lum-strategy": {"type": "exact", "lum": 50.0},
            "chroma-strategy": {"type": "random"},
            "hue-strategies": [{"type": "cycle", "count": 2}],
            "misc-flags": [],
        }
    }


def _config(**extra):
    section = {"strategies": [{"bayer": {"matrix-size": 4}}], "palette": _palette()}
    section.update(extra)
    return {"ordered": section}


def test_generates_chosen_strategy_and_palette():
    effect = Ordered.from_value(_config()).generate_effect(random.Random(1))
    assert isinstance(effect, OrderedDither)
    assert effect.strategy.kind is StrategyKind.BAYER
    assert effect.strategy.parameters == {"n": 4}
    assert len(effect.palette) == 2
    assert all(len(colour) == 3 for colour in effect.palette)


def test_absent_modifiers_leave_defaults():
    effect = Ordered.from_value(_config()).generate_effect(random.Random(2))
    assert effect.blur is None
    assert effect.exponentiate is None
    assert effect.rotation is None
    assert effect.checker is None
    assert effect.invert is False
    assert effect.mirror == ()


def test_zero_chance_modifiers_always_apply():
    config = _config(
        blur={"chance": 0.0, "factor": 3},
        invert={"chance": 0.0},
        rotation={"chance": 0.0, "values": ["left"]},
        exponentiate={"chance": 0.0, "factor": 2.5},
    )
    effect = Ordered.from_value(config).generate_effect(random.Random(3))
    assert effect.blur == 3
    assert effect.invert is True
    assert effect.rotation is RotationDirection.LEFT
    assert effect.exponentiate == 2.5


def test_strategy_is_one_of_listed():
    config = _config(strategies=[{"grid": None}, {"stars": None}])
    ordered = Ordered.from_value(config)
    rng = random.Random(4)
    kinds = {ordered.generate_effect(rng).strategy.kind for _ in range(30)}
    assert kinds <= {StrategyKind.GRID, StrategyKind.STARS}
    assert kinds


def test_missing_ordered_section():
    with pytest.raises(ConfigError):
        Ordered.from_value({"other": {}})


def test_missing_strategies():
    with pytest.raises(ConfigError):
        Ordered.from_value({"ordered": {"palette": _palette()}})


def test_missing_palette():
    with pytest.raises(ConfigError):
        Ordered.from_value({"ordered": {"strategies": [{"grid": None}]}})


def test_empty_strategy_list_fails_on_generate():
    ordered = Ordered.from_value(_config(strategies=[]))
    with pytest.raises(ConfigError):
        ordered.generate_effect(random.Random(5))