"""Hue generation strategies for palettes."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from imgtoy.value import (
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
)


class HueDistribution(Enum):
    LINEAR = "linear"
    RANDOM = "random"


class HueStrategyKind(Enum):
    NEIGHBOUR = "neighbour"
    CONTRAST = "contrast"
    PENPAL = "penpal"
    CYCLE = "cycle"


def _uniform(rng, low: float, high: float) -> float:
    if not low < high:
        raise ConfigError(f"range {low}..{high} is empty")
    return low + rng.random() * (high - low)


def _fraction(i: int, n: int) -> float:
    # A single linear step divides zero by zero, which yields NaN.
    return i / (n - 1) if n > 1 else math.nan


def generate_hue_neighbourhood(
    hue: float, size: float, n: int, dist: HueDistribution, rng=None
) -> list[float]:
    """Generate ``n`` hues within ``size`` degrees either side of ``hue``."""
    rng = rng if rng is not None else random
    lower = hue - size
    upper = hue + size
    if dist is HueDistribution.LINEAR:
        return [math.fmod(lower + size * 2.0 * _fraction(i, n), 360.0) for i in range(n)]
    return [math.fmod(_uniform(rng, lower, upper), 360.0) for _ in range(n)]


def _type_of(value: Any, context: str) -> str:
    kind = value.get("type") if isinstance(value, dict) else None
    if not isinstance(kind, str):
        raise ConfigError(f"[{context}.type] must be a string")
    return kind


def _required(value: Any, name: str, parse) -> ValueProperty:
    prop = parse(value, name)
    if prop is None:
        raise ConfigError(f"hue strategy requires [{name}]")
    return prop


def _distribution(value: Any) -> HueDistribution:
    raw = value.get("distribution")
    if not isinstance(raw, str):
        raise ConfigError("hue strategy requires a [distribution] string")
    try:
        return HueDistribution(raw)
    except ValueError:
        raise ConfigError(f"hue distribution {raw} is not supported.") from None


@dataclass(frozen=True)
class HueStrategy:
    """One way of deriving hues from a seed hue."""

    kind: HueStrategyKind
    count: ValueProperty
    size: Optional[ValueProperty] = None
    distribution: Optional[HueDistribution] = None
    distance: Optional[ValueProperty] = None

    @classmethod
    def from_value(cls, value: Any) -> "HueStrategy":
        raw = _type_of(value, "hue-strategy")
        try:
            kind = HueStrategyKind(raw)
        except ValueError:
            raise ConfigError(f"hue-strategy {raw} is not supported") from None

        if kind is HueStrategyKind.CYCLE:
            return cls(kind, count=_required(value, "count", parse_property_as_usize))

        size = _required(value, "size", parse_property_as_f64)
        count = _required(value, "count", parse_property_as_usize)
        distribution = _distribution(value)
        distance = (
            _required(value, "distance", parse_property_as_f64)
            if kind is HueStrategyKind.PENPAL
            else None
        )
        return cls(kind, count, size, distribution, distance)

    def execute(self, rng=None) -> list[float]:
        """Run the strategy with a random seed hue."""
        rng = rng if rng is not None else random
        return self.execute_with_seed_hue(_uniform(rng, 0.0, 360.0), rng)

    def execute_with_seed_hue(self, seed_hue: float, rng=None) -> list[float]:
        """Run the strategy around the given seed hue."""
        rng = rng if rng is not None else random
        if self.kind is HueStrategyKind.CYCLE:
            count = self.count.generate(rng)
            step = 360.0 / (count + 1.0)
            return [seed_hue + i * step for i in range(1, count + 1)]

        if self.kind is HueStrategyKind.NEIGHBOUR:
            centre = seed_hue
        elif self.kind is HueStrategyKind.CONTRAST:
            centre = seed_hue + 180.0
        else:
            centre = seed_hue + self.distance.generate(rng)

        size = self.size.generate(rng)
        count = self.count.generate(rng)
        return generate_hue_neighbourhood(centre, size, count, self.distribution, rng)


@dataclass(frozen=True)
class HueStrategies:
    """A stack of hue strategies sharing one seed hue."""

    strategies: tuple[HueStrategy, ...]

    @classmethod
    def from_value(cls, value: Any) -> "HueStrategies":
        if not isinstance(value, list):
            raise ConfigError("[hue-strategies] must be a list of mappings")
        return cls(tuple(HueStrategy.from_value(entry) for entry in value))

    def generate_hues(self, rng=None) -> list[float]:
        rng = rng if rng is not None else random
        seed_hue = _uniform(rng, 0.0, 360.0)
        return [
            hue
            for strategy in self.strategies
            for hue in strategy.execute_with_seed_hue(seed_hue, rng)
        ]