"""Ordered dithering strategies and the patterns they produce."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from imgtoy.ordered_options import (
    Diagonal,
    Increase,
    Orientation,
    Wrapping,
    parse_dimensions_as_f64,
    parse_matrix_size,
)
from imgtoy.value import (
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
)

Pair = tuple[Optional[ValueProperty], Optional[ValueProperty]]


class StrategyKind(Enum):
    BAYER = "bayer"
    DIAMOND = "diamond"
    CHECKERED_DIAMONDS = "checkered-diamonds"
    STARS = "stars"
    NEW_STARS = "new-stars"
    GRID = "grid"
    TRAIL = "trail"
    CRISSCROSS = "crisscross"
    STATIC = "static"
    WAVY = "wavy"
    BOOTLEG_BAYER = "bootleg-bayer"
    DIAGONALS = "diagonals"
    DIAGONALS_BIG = "diagonals-big"
    DIAGONALS_N = "diagonals-n"
    DIAMOND_GRID = "diamond-grid"
    SPECKLE_SQUARES = "speckle-squares"
    SCALES = "scales"
    TRAIL_SCALES = "trail-scales"
    DIAGONAL_TILES = "diagonal-tiles"
    BOUNCING_BOWTIE = "bouncing-bowtie"
    SCANLINE = "scanline"
    STARBURST = "starburst"
    SHINY_BOWTIE = "shiny-bowtie"
    MARBLE_TILE = "marble-tile"
    CURVE_PATH = "curve-path"
    ZIGZAG = "zigzag"
    BROKEN_SPIRAL = "broken-spiral"
    MODULO_SNAKE = "modulo-snake"


_PLAIN = frozenset(
    {
        StrategyKind.STARS,
        StrategyKind.NEW_STARS,
        StrategyKind.GRID,
        StrategyKind.TRAIL,
        StrategyKind.CRISSCROSS,
        StrategyKind.STATIC,
        StrategyKind.BOOTLEG_BAYER,
        StrategyKind.DIAGONALS,
        StrategyKind.DIAGONALS_BIG,
        StrategyKind.DIAMOND_GRID,
        StrategyKind.SPECKLE_SQUARES,
        StrategyKind.SCALES,
        StrategyKind.TRAIL_SCALES,
    }
)

_SIZED = frozenset(
    {
        StrategyKind.BAYER,
        StrategyKind.DIAMOND,
        StrategyKind.CHECKERED_DIAMONDS,
        StrategyKind.DIAGONAL_TILES,
        StrategyKind.BOUNCING_BOWTIE,
        StrategyKind.STARBURST,
        StrategyKind.SHINY_BOWTIE,
        StrategyKind.MARBLE_TILE,
    }
)

_NO_PAIR: Pair = (None, None)


def _fixed(number, number_type: str) -> ValueProperty:
    return ValueProperty("fixed", (number,), number_type)


def _usize_or(effect: Any, name: str, default: int) -> ValueProperty:
    prop = parse_property_as_usize(effect, name)
    return prop if prop is not None else _fixed(default, "usize")


def _f64_or(effect: Any, name: str, default: float) -> ValueProperty:
    prop = parse_property_as_f64(effect, name)
    return prop if prop is not None else _fixed(default, "f64")


def _required_usize(effect: Any, name: str) -> ValueProperty:
    prop = parse_property_as_usize(effect, name)
    if prop is None:
        raise ConfigError(f"[{name}] is required")
    return prop


def _dimensions(effect: Any, name: str) -> Pair:
    section = effect.get(name) if isinstance(effect, dict) else None
    return parse_dimensions_as_f64(section) if section is not None else _NO_PAIR


def _pair(pair: Pair, default: float, rng) -> tuple[float, float]:
    return tuple(p.generate(rng) if p is not None else default for p in pair)


@dataclass(frozen=True)
class OrderedStrategy:
    """A concrete dithering pattern with its resolved parameters."""

    kind: StrategyKind
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Strategy:
    """A configured ordered dithering strategy with randomisable parameters."""

    kind: StrategyKind
    matrix_size: Optional[ValueProperty] = None
    orientation: Optional[Orientation] = None
    direction: Optional[Diagonal] = None
    increase: Optional[Increase] = None
    amplitude: Optional[ValueProperty] = None
    promotion: Optional[ValueProperty] = None
    halt_threshold: Optional[ValueProperty] = None
    wrapping: Optional[Wrapping] = None
    magnitude: Pair = _NO_PAIR
    promotion_xy: Pair = _NO_PAIR
    base_step: Pair = _NO_PAIR
    oob_threshold: Optional[ValueProperty] = None
    increment_by: Optional[ValueProperty] = None
    increment_in: Optional[ValueProperty] = None
    modulo: Optional[ValueProperty] = None
    iterations: Optional[ValueProperty] = None

    @classmethod
    def from_value(cls, value: Any) -> "Strategy":
        """Parse a single-key mapping naming the strategy and its settings."""
        if not isinstance(value, dict) or not value:
            raise ConfigError("an ordered strategy must be a non-empty mapping")
        name = next(iter(value))
        if not isinstance(name, str):
            raise ConfigError("an ordered strategy must be named by a string")
        try:
            kind = StrategyKind(name)
        except ValueError:
            raise ConfigError(f"didn't expect {name}") from None
        effect = value[name]

        if kind in _PLAIN:
            return cls(kind)
        if kind in _SIZED:
            return cls(kind, matrix_size=parse_matrix_size(effect))
        if kind is StrategyKind.WAVY:
            return cls(kind, orientation=Orientation.from_value(effect) or Orientation())
        if kind is StrategyKind.DIAGONALS_N:
            return cls(
                kind,
                matrix_size=parse_matrix_size(effect),
                direction=Diagonal.from_value(effect),
                increase=Increase.from_value(effect) or Increase(),
            )
        if kind is StrategyKind.SCANLINE:
            return cls(
                kind,
                matrix_size=parse_matrix_size(effect),
                orientation=Orientation.from_value(effect) or Orientation(),
            )
        if kind is StrategyKind.CURVE_PATH:
            return cls(
                kind,
                matrix_size=parse_matrix_size(effect),
                amplitude=_f64_or(effect, "amplitude", 1.0),
                promotion=_f64_or(effect, "promotion", 0.0),
                halt_threshold=_required_usize(effect, "halt-threshold"),
            )
        if kind is StrategyKind.ZIGZAG:
            return cls(
                kind,
                matrix_size=parse_matrix_size(effect),
                halt_threshold=_required_usize(effect, "halt-threshold"),
                wrapping=Wrapping.from_value(effect) or Wrapping(),
                magnitude=_dimensions(effect, "magnitude"),
                promotion_xy=_dimensions(effect, "promotion"),
            )
        if kind is StrategyKind.BROKEN_SPIRAL:
            return cls(
                kind,
                matrix_size=parse_matrix_size(effect),
                base_step=_dimensions(effect, "base-step"),
                oob_threshold=_usize_or(effect, "oob-threshold", 100),
                increment_by=_f64_or(effect, "increment-by", 1.0),
                increment_in=_usize_or(effect, "increment-in", 1),
            )
        return cls(
            kind,
            matrix_size=parse_matrix_size(effect),
            increment_by=_f64_or(effect, "increment-by", 1.0),
            modulo=_usize_or(effect, "modulo", 10),
            iterations=_usize_or(effect, "iterations", 1),
        )

    def generate_effect(self, rng=None) -> OrderedStrategy:
        """Resolve every random parameter into a concrete pattern."""
        rng = rng if rng is not None else random
        kind = self.kind

        if kind in _PLAIN:
            return OrderedStrategy(kind, {})
        n = self.matrix_size.generate(rng) if self.matrix_size is not None else None
        if kind in _SIZED:
            return OrderedStrategy(kind, {"n": n})
        if kind is StrategyKind.WAVY:
            return OrderedStrategy(kind, {"orientation": self.orientation.generate(rng)})
        if kind is StrategyKind.DIAGONALS_N:
            return OrderedStrategy(
                kind,
                {
                    "n": n,
                    "direction": self.direction.generate(rng),
                    "increase": self.increase.generate(rng),
                },
            )
        if kind is StrategyKind.SCANLINE:
            return OrderedStrategy(
                kind, {"n": n, "orientation": self.orientation.generate(rng)}
            )
        if kind is StrategyKind.CURVE_PATH:
            return OrderedStrategy(
                kind,
                {
                    "n": n,
                    "amplitude": self.amplitude.generate(rng),
                    "promotion": self.promotion.generate(rng),
                    "halt_threshold": self.halt_threshold.generate(rng),
                },
            )
        if kind is StrategyKind.ZIGZAG:
            return OrderedStrategy(
                kind,
                {
                    "n": n,
                    "halt_threshold": self.halt_threshold.generate(rng),
                    "wrapping": self.wrapping.pick(rng),
                    "magnitude": _pair(self.magnitude, 1.0, rng),
                    "promotion": _pair(self.promotion_xy, 0.0, rng),
                },
            )
        if kind is StrategyKind.BROKEN_SPIRAL:
            return OrderedStrategy(
                kind,
                {
                    "n": n,
                    "base_step": _pair(self.base_step, 0.0, rng),
                    "oob_threshold": self.oob_threshold.generate(rng),
                    "increment_by": self.increment_by.generate(rng),
                    "increment_in": self.increment_in.generate(rng),
                },
            )
        return OrderedStrategy(
            kind,
            {
                "n": n,
                "increment_by": self.increment_by.generate(rng),
                "modulo": self.modulo.generate(rng),
                "iterations": self.iterations.generate(rng),
            },
        )