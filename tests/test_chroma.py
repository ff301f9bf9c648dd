import random

import pytest

from imgtoy.chroma import ChromaStrategy, ChromaStrategyKind
from imgtoy.value import ConfigError


def test_from_value_random():
    strategy = ChromaStrategy.from_value({"type": "random"})
    assert strategy.kind is ChromaStrategyKind.RANDOM


def test_attach_chroma_preserves_lum_and_hue():
    strategy = ChromaStrategy.from_value({"type": "random"})
    colours = [(10.0, 200.0), (55.0, 30.0), (90.0, 310.0)]
    result = strategy.attach_chroma(colours, random.Random(5))
    assert [(l, h) for l, _, h in result] == colours
    assert all(0.0 <= c < 128.0 for _, c, _ in result)


def test_attach_chroma_empty():
    strategy = ChromaStrategy(ChromaStrategyKind.RANDOM)
    assert strategy.attach_chroma([], random.Random(0)) == []


def test_unknown_type_raises():
    with pytest.raises(ConfigError):
        ChromaStrategy.from_value({"type": "vivid"})


def test_missing_type_raises():
    with pytest.raises(ConfigError):
        ChromaStrategy.from_value({})