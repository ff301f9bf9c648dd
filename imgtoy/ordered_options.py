"""Options shared by ordered dithering strategies: sizes, orientations, diagonals,
increase modes and wrapping."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, TypeVar

from imgtoy.value import (
    Chance,
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
)

T = TypeVar("T")


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _as_ratio(raw: Any, context: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    raise ConfigError(f"[{context}] must be a float.")


def _weighted_pick(ratios: Sequence[tuple[float, T]], rng) -> T:
    """Pick an option with probability proportional to its ratio."""
    capacity = sum(ratio for ratio, _ in ratios)
    if not 0.0 < capacity:
        raise ConfigError(f"range 0.0..{capacity} is empty")
    flag = rng.random() * capacity
    for ratio, option in ratios:
        flag -= ratio
        if flag <= 0.0:
            return option
    raise RuntimeError("weighted choice did not settle on an option")


def parse_matrix_size(value: Any) -> ValueProperty:
    """Parse the required ``matrix-size`` property."""
    size = parse_property_as_usize(value, "matrix-size")
    if size is None:
        raise ConfigError("[matrix-size] is required")
    return size


def parse_dimensions_as_f64(
    value: Any,
) -> tuple[Optional[ValueProperty], Optional[ValueProperty]]:
    """Parse optional ``x`` and ``y`` float properties."""
    return (parse_property_as_f64(value, "x"), parse_property_as_f64(value, "y"))


class OrientationValue(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Orientation:
    """A fixed orientation, or weighted ratios between orientations."""

    exact: Optional[OrientationValue] = OrientationValue.HORIZONTAL
    ratios: tuple[tuple[float, OrientationValue], ...] = ()

    @classmethod
    def from_value(cls, value: Any) -> Optional["Orientation"]:
        raw = _get(value, "orientation")
        if raw is None:
            return None
        if isinstance(raw, dict):
            ratios = tuple(
                (_as_ratio(raw[key], f"ordered.orientation.{key}"), option)
                for key, option in (
                    ("horizontal", OrientationValue.HORIZONTAL),
                    ("vertical", OrientationValue.VERTICAL),
                )
                if key in raw
            )
            return cls(exact=None, ratios=ratios)
        if isinstance(raw, str):
            try:
                return cls(exact=OrientationValue(raw))
            except ValueError:
                raise ConfigError(
                    "[ordered.orientation] must be 'horizontal', 'vertical', "
                    "or a mapping of ratios."
                ) from None
        raise ConfigError(
            "[ordered.orientation] must be a mapping of ratios, "
            "or one of 'vertical' / 'horizontal'"
        )

    def generate(self, rng=None) -> OrientationValue:
        if self.exact is not None:
            return self.exact
        return _weighted_pick(self.ratios, rng if rng is not None else random)


class DiagonalDirection(Enum):
    DOWN_RIGHT = "down-right"
    UP_RIGHT = "up-right"


@dataclass(frozen=True)
class Diagonal:
    """A fixed diagonal direction, or weighted ratios between directions."""

    exact: Optional[DiagonalDirection] = None
    ratios: tuple[tuple[float, DiagonalDirection], ...] = ()

    @classmethod
    def from_value(cls, value: Any) -> "Diagonal":
        raw = _get(value, "diagonal-direction")
        if raw is None:
            raise ConfigError("[ordered.strategy] requires [ordered.diagonal-direction]")
        if isinstance(raw, dict):
            ratios = tuple(
                (_as_ratio(raw[key], f"ordered.diagonal-direction.{key}"), option)
                for key, option in (
                    ("down-right", DiagonalDirection.DOWN_RIGHT),
                    ("up-right", DiagonalDirection.UP_RIGHT),
                )
                if key in raw
            )
            return cls(ratios=ratios)
        if isinstance(raw, str):
            try:
                return cls(exact=DiagonalDirection(raw))
            except ValueError:
                raise ConfigError(
                    "[ordered.orientation] must be 'down-right', 'up-right', "
                    "or a mapping of ratios."
                ) from None
        raise ConfigError(
            "[ordered.orientation] must be a mapping of ratios, "
            "or one of 'down-right' / 'up-right'"
        )

    def generate(self, rng=None) -> DiagonalDirection:
        if self.exact is not None:
            return self.exact
        return _weighted_pick(self.ratios, rng if rng is not None else random)


class IncreaseValueKind(Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class IncreaseValue:
    """An increase mode with a randomisable factor."""

    kind: IncreaseValueKind
    factor: ValueProperty

    def to_property(self, rng=None) -> tuple[IncreaseValueKind, int]:
        """Produce the mode and its factor truncated to a byte."""
        rng = rng if rng is not None else random
        return (self.kind, int(self.factor.generate(rng)) & 0xFF)


_DEFAULT_INCREASE = IncreaseValue(
    IncreaseValueKind.LINEAR, ValueProperty("fixed", (1,), "usize")
)
_NEVER = Chance(ValueProperty("fixed", (0.0,), "f64"))


@dataclass(frozen=True)
class Increase:
    """How values increase along a diagonal pattern."""

    exact: Optional[IncreaseValue] = _DEFAULT_INCREASE
    ratios: tuple[tuple[float, IncreaseValue], ...] = ()
    chance: Chance = _NEVER

    @classmethod
    def from_value(cls, value: Any) -> Optional["Increase"]:
        raw = _get(value, "increase")
        if raw is None:
            return None
        if not isinstance(raw, dict) or "type" not in raw:
            raise ConfigError("[ordered.strategy.increase-strategy] must have a [type]")
        strategy_type = raw["type"]

        chance = parse_property_as_f64(raw, "chance")
        if chance is None:
            raise ConfigError("[increase.chance] is required")
        factor = parse_property_as_usize(raw, "factor")
        if factor is None:
            raise ConfigError("[increase.factor] is required")

        if isinstance(strategy_type, dict):
            ratios = tuple(
                (_as_ratio(strategy_type[key], f"increase.type.{key}"), IncreaseValue(kind, factor))
                for key, kind in (
                    ("linear", IncreaseValueKind.LINEAR),
                    ("exponential", IncreaseValueKind.EXPONENTIAL),
                )
                if key in strategy_type
            )
            return cls(exact=None, ratios=ratios, chance=Chance(chance))
        if isinstance(strategy_type, str):
            try:
                kind = IncreaseValueKind(strategy_type)
            except ValueError:
                raise ConfigError(
                    "[ordered.increase-strategy.type] must be 'linear' or 'exponential'"
                ) from None
            return cls(exact=IncreaseValue(kind, factor), chance=Chance(chance))
        raise ConfigError("[increase.type] must be a mapping of ratios, or a string")

    def generate(self, rng=None) -> tuple[IncreaseValueKind, int]:
        rng = rng if rng is not None else random
        if not self.chance.roll(rng):
            raise RuntimeError("increase chance was not met")
        if self.exact is not None:
            return self.exact.to_property(rng)
        return _weighted_pick(self.ratios, rng).to_property(rng)


class WrappingKind(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    ALL = "all"
    NONE = "none"


@dataclass(frozen=True)
class Wrapping:
    """A set of wrapping modes, one of which is picked per use."""

    kinds: tuple[WrappingKind, ...] = (WrappingKind.NONE,)

    @classmethod
    def from_value(cls, value: Any) -> Optional["Wrapping"]:
        raw = _get(value, "wrapping")
        if raw is None:
            return None
        if not isinstance(raw, list):
            raise ConfigError("[wrappings] must be a list.")
        kinds = []
        for entry in raw:
            if not isinstance(entry, str):
                raise ConfigError("[wrappings[$]] must be a string.")
            try:
                kinds.append(WrappingKind(entry))
            except ValueError:
                raise ConfigError(f"wrapping {entry} is not supported") from None
        return cls(tuple(kinds))

    def pick(self, rng=None) -> WrappingKind:
        if not self.kinds:
            raise ConfigError("cannot choose from an empty list of wrappings")
        return (rng if rng is not None else random).choice(self.kinds)