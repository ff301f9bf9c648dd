"""Chance-driven modifiers for ordered dithering: rotation, invert,
exponentiation and blur."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from imgtoy.value import (
    Chance,
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
)


def _section(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _chance(section: Any) -> Chance:
    prop = parse_property_as_f64(section, "chance")
    return Chance(prop if prop is not None else ValueProperty("fixed", (0.0,), "f64"))


class RotationDirection(Enum):
    RIGHT = "right"
    LEFT = "left"
    HALF = "half"
    NONE = "none"


@dataclass(frozen=True)
class Rotation:
    """Rotates the dither matrix by one of the listed directions."""

    chance: Chance
    values: tuple[RotationDirection, ...]

    @classmethod
    def from_value(cls, value: Any) -> Optional["Rotation"]:
        rotation = _section(value, "rotation")
        if rotation is None:
            return None
        raw = _section(rotation, "values")
        if raw is None:
            raise ConfigError("expected [values]")
        if not isinstance(raw, list):
            raise ConfigError("expected [rotation.values] to be a list")
        values = []
        for entry in raw:
            if not isinstance(entry, str):
                raise ConfigError("expected [rotation.values] entries to be strings")
            try:
                values.append(RotationDirection(entry))
            except ValueError:
                raise ConfigError(f"rotation direction {entry} is not supported.") from None
        return cls(_chance(rotation), tuple(values))

    def to_tool(self, rng=None) -> Optional[RotationDirection]:
        rng = rng if rng is not None else random
        if not self.chance.roll(rng):
            return None
        if not self.values:
            raise ConfigError("cannot choose from an empty list of rotations")
        return rng.choice(self.values)


@dataclass(frozen=True)
class Invert:
    """Inverts the dither matrix on a successful roll."""

    chance: Chance

    @classmethod
    def from_value(cls, value: Any) -> Optional["Invert"]:
        invert = _section(value, "invert")
        if invert is None:
            return None
        return cls(_chance(invert))

    def roll(self, rng=None) -> bool:
        return self.chance.roll(rng if rng is not None else random)


@dataclass(frozen=True)
class Exponentiate:
    """Raises the dither matrix to a power on a successful roll."""

    chance: Chance
    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> Optional["Exponentiate"]:
        section = _section(value, "exponentiate")
        if section is None:
            return None
        factor = parse_property_as_f64(section, "factor")
        if factor is None:
            factor = ValueProperty("fixed", (0.0,), "f64")
        return cls(_chance(section), factor)

    def generate_factor(self, rng=None) -> Optional[float]:
        rng = rng if rng is not None else random
        if self.chance.roll(rng):
            return self.factor.generate(rng)
        return None


@dataclass(frozen=True)
class Blur:
    """Blurs the dither matrix on a successful roll."""

    chance: Chance
    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> Optional["Blur"]:
        section = _section(value, "blur")
        if section is None:
            return None
        factor = parse_property_as_usize(section, "factor")
        if factor is None:
            factor = ValueProperty("fixed", (1,), "usize")
        return cls(_chance(section), factor)

    def generate_factor(self, rng=None) -> Optional[int]:
        rng = rng if rng is not None else random
        if self.chance.roll(rng):
            return self.factor.generate(rng)
        return None