import random

import pytest

from imgtoy.effects import (
    Brighten,
    Contrast,
    Effects,
    ErrorPropagator,
    ErrorPropagatorDither,
    ErrorPropagatorKind,
    Filter,
    GradientMap,
    HueRotate,
    MultiplyHue,
    QuantizeHue,
    Saturate,
    parse_effect,
)
from imgtoy.ordered_effect import Ordered, OrderedDither
from imgtoy.value import ConfigError


def _palette():
    return {
        "config": {
            "lum-strategy": {"type": "exact", "lum": 50.0},
            "chroma-strategy": {"type": "random"},
            "hue-strategies": [{"type": "cycle", "count": 3}],
            "misc-flags": [],
        }
    }


@pytest.mark.parametrize(
    "cls,key",
    [
        (Brighten, "brighten"),
        (Saturate, "saturate"),
        (Contrast, "contrast"),
        (HueRotate, "hue-rotate"),
        (MultiplyHue, "multiply-hue"),
    ],
)
def test_simple_effect_fixed_factor(cls, key):
    effect = cls.from_value({key: {"factor": 1.5}})
    assert effect.generate(random.Random(0)) == Filter(key, 1.5)


def test_simple_effect_range_factor_within_bounds():
    effect = Brighten.from_value({"brighten": {"factor": {"min": 0.2, "max": 0.4}}})
    rng = random.Random(1)
    for _ in range(20):
        result = effect.generate(rng)
        assert result.kind == "brighten"
        assert 0.2 <= result.value < 0.4


def test_simple_effect_missing_factor():
    with pytest.raises(ConfigError):
        Contrast.from_value({"contrast": {}})


def test_simple_effect_missing_section():
    with pytest.raises(ConfigError):
        Saturate.from_value({"brighten": {"factor": 1.0}})


def test_quantize_hue():
    effect = QuantizeHue.from_value({"quantize-hue": None, "hues": [10, [30.0]]})
    assert effect.generate(random.Random(2)) == Filter("quantize-hue", (10.0, 30.0))


def test_quantize_hue_requires_list():
    with pytest.raises(ConfigError):
        QuantizeHue.from_value({"quantize-hue": None})


@pytest.mark.parametrize(
    "name,kind",
    [
        ("floyd_steinberg", ErrorPropagatorKind.FLOYD_STEINBERG),
        ("jarvisjudiceninke", ErrorPropagatorKind.JARVIS_JUDICE_NINKE),
        ("atkinson", ErrorPropagatorKind.ATKINSON),
        ("sierra_two_row", ErrorPropagatorKind.SIERRA_TWO_ROW),
        ("sierra_to_row", ErrorPropagatorKind.SIERRA_LITE),
    ],
)
def test_error_propagator_names(name, kind):
    effect = ErrorPropagator.from_value(
        {"error-propagator": None, "type": name, "palette": _palette()}
    )
    assert effect.kind is kind
    result = effect.generate(random.Random(3))
    assert isinstance(result, ErrorPropagatorDither)
    assert result.kind is kind
    assert len(result.palette) == 3


def test_error_propagator_unknown_type():
    with pytest.raises(ConfigError):
        ErrorPropagator.from_value({"type": "nope", "palette": _palette()})


def test_gradient_map_parses_hex():
    effect = GradientMap.from_value(
        {"gradient-map": [{"colour": "ff0000", "threshold": 0.5}]}
    )
    assert effect.generate() == Filter("gradient-map", (((1.0, 0.0, 0.0), 0.5),))


def test_gradient_map_rejects_bad_hex():
    with pytest.raises(ConfigError):
        GradientMap.from_value({"gradient-map": [{"colour": "zz0000", "threshold": 0.5}]})
    with pytest.raises(ConfigError):
        GradientMap.from_value({"gradient-map": [{"colour": "fff", "threshold": 0.5}]})


def test_parse_effect_dispatch():
    hue_rotate = parse_effect({"hue-rotate": {"factor": 90}})
    assert hue_rotate.generate(random.Random(0)) == Filter("hue-rotate", 90.0)
    ordered = parse_effect(
        {"ordered": {"strategies": [{"grid": None}], "palette": _palette()}}
    )
    assert isinstance(ordered, Ordered)
    assert isinstance(ordered.generate_effect(random.Random(0)), OrderedDither)


def test_parse_effect_unknown():
    with pytest.raises(ConfigError):
        parse_effect({"blur-everything": {}})


def test_effects_generate_in_order():
    effects = Effects.from_value(
        {
            "effects": [
                {"brighten": {"factor": 0.1}},
                {"ordered": {"strategies": [{"grid": None}], "palette": _palette()}},
                {"contrast": {"factor": 2.0}},
            ]
        }
    )
    results = effects.generate(random.Random(4))
    assert len(results) == 3
    assert results[0] == Filter("brighten", 0.1)
    assert isinstance(results[1], OrderedDither)
    assert results[2] == Filter("contrast", 2.0)


def test_effects_requires_list():
    with pytest.raises(ConfigError):
        Effects.from_value({"effects": {"brighten": {"factor": 1.0}}})