"""Mirroring modifier for ordered dithering."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from imgtoy.value import Chance, ConfigError, ValueProperty, parse_property_as_f64


class MirrorDirection(Enum):
    DOWNRIGHT = "downright"
    UPRIGHT = "upright"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class MirrorLine:
    """One resolved mirror operation."""

    direction: MirrorDirection
    flip: bool
    thorough: bool


def _chance(section: Any, name: str) -> Chance:
    prop = parse_property_as_f64(section, name)
    return Chance(prop if prop is not None else ValueProperty("fixed", (0.0,), "f64"))


def _direction_set(raw: Any) -> tuple[MirrorDirection, ...]:
    if not isinstance(raw, list):
        raise ConfigError("[mirror.directions[$]] should be a sequence of strings.")
    directions = []
    for entry in raw:
        if not isinstance(entry, str):
            raise ConfigError("[mirror.directions[$][$]] must be a string.")
        try:
            directions.append(MirrorDirection(entry))
        except ValueError:
            raise ConfigError(f"mirror direction {entry} is not supported") from None
    return tuple(directions)


@dataclass(frozen=True)
class Mirror:
    """Mirrors the dither matrix along one randomly chosen set of directions."""

    flip: Chance
    thorough: Chance
    chance: Chance
    directions: tuple[tuple[MirrorDirection, ...], ...]

    @classmethod
    def from_value(cls, value: Any) -> Optional["Mirror"]:
        mirror = value.get("mirror") if isinstance(value, dict) else None
        if mirror is None:
            return None
        raw = mirror.get("directions") if isinstance(mirror, dict) else None
        if raw is None:
            raise ConfigError("[mirror.directions] must specify at least one direction.")
        if not isinstance(raw, list):
            raise ConfigError("[mirror.directions] must be a list.")
        return cls(
            flip=_chance(mirror, "flip"),
            thorough=_chance(mirror, "thorough"),
            chance=_chance(mirror, "chance"),
            directions=tuple(_direction_set(entry) for entry in raw),
        )

    def to_tool(self, rng=None) -> list[MirrorLine]:
        """Return the mirror lines to apply, empty when the roll fails."""
        rng = rng if rng is not None else random
        if not self.chance.roll(rng):
            return []
        if not self.directions:
            raise ConfigError("cannot choose from an empty list of mirror directions")
        chosen = rng.choice(self.directions)
        return [
            MirrorLine(direction, self.flip.roll(rng), self.thorough.roll(rng))
            for direction in chosen
        ]