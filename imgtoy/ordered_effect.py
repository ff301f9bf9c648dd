"""Ordered dithering: one strategy picked from a list, plus optional modifiers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Optional

from imgtoy.checker import Checker
from imgtoy.mirror import Mirror, MirrorLine
from imgtoy.modifiers import Blur, Exponentiate, Invert, Rotation, RotationDirection
from imgtoy.palette import Palette
from imgtoy.strategies import OrderedStrategy, Strategy
from imgtoy.value import ConfigError


@dataclass(frozen=True)
class OrderedDither:
    """A fully resolved ordered dither: palette, pattern and applied modifiers."""

    palette: tuple[tuple[float, float, float], ...]
    strategy: OrderedStrategy
    blur: Optional[int] = None
    exponentiate: Optional[float] = None
    rotation: Optional[RotationDirection] = None
    checker: Optional[tuple] = None
    invert: bool = False
    mirror: tuple[MirrorLine, ...] = ()


@dataclass(frozen=True)
class Ordered:
    """Ordered dithering settings; one of the strategies is chosen per use."""

    strategies: tuple[Strategy, ...]
    palette: Palette
    blur: Optional[Blur] = None
    exponentiate: Optional[Exponentiate] = None
    rotation: Optional[Rotation] = None
    checker: Optional[Checker] = None
    invert: Optional[Invert] = None
    mirror: Optional[Mirror] = None

    @classmethod
    def from_value(cls, value: Any) -> "Ordered":
        section = value.get("ordered") if isinstance(value, dict) else None
        if not isinstance(section, dict):
            raise ConfigError("[ordered] must be a mapping")
        raw = section.get("strategies")
        if not isinstance(raw, list):
            raise ConfigError("[ordered.strategies] must be a list")
        return cls(
            strategies=tuple(Strategy.from_value(entry) for entry in raw),
            blur=Blur.from_value(section),
            exponentiate=Exponentiate.from_value(section),
            rotation=Rotation.from_value(section),
            checker=Checker.from_value(section),
            invert=Invert.from_value(section),
            mirror=Mirror.from_value(section),
            palette=Palette.from_value(section),
        )

    def generate_effect(self, rng=None) -> OrderedDither:
        """Pick a strategy, roll every modifier and generate a palette."""
        rng = rng if rng is not None else random
        if not self.strategies:
            raise ConfigError("cannot choose from an empty list of strategies")
        strategy = rng.choice(self.strategies).generate_effect(rng)

        blur = self.blur.generate_factor(rng) if self.blur is not None else None
        exponentiate = (
            self.exponentiate.generate_factor(rng) if self.exponentiate is not None else None
        )
        rotation = self.rotation.to_tool(rng) if self.rotation is not None else None
        checker = self.checker.to_tool(rng) if self.checker is not None else None
        invert = self.invert.roll(rng) if self.invert is not None else False
        mirror = tuple(self.mirror.to_tool(rng)) if self.mirror is not None else ()

        return OrderedDither(
            palette=tuple(self.palette.generate(rng)),
            strategy=strategy,
            blur=blur,
            exponentiate=exponentiate,
            rotation=rotation,
            checker=checker,
            invert=invert,
            mirror=mirror,
        )