"""Palette generation from hue, luminance and chroma strategies."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any

from imgtoy.chroma import ChromaStrategy
from imgtoy.hue import HueStrategies
from imgtoy.lum import LumStrategy
from imgtoy.value import ConfigError

# D65 reference white.
_WHITE = (0.95047, 1.0, 1.08883)
_DELTA = 6.0 / 29.0

_XYZ_TO_LINEAR_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)


def _lab_f_inverse(t: float) -> float:
    if t > _DELTA:
        return t**3
    return 3.0 * _DELTA**2 * (t - 4.0 / 29.0)


def _encode(linear: float) -> float:
    if linear <= 0.0031308:
        return 12.92 * linear
    return 1.055 * linear ** (1.0 / 2.4) - 0.055


def lch_to_srgb(l: float, c: float, h: float) -> tuple[float, float, float]:
    """Convert a CIE LCh(ab) colour (D65) to unclamped sRGB components in 0..1."""
    hue = math.radians(h)
    a = c * math.cos(hue)
    b = c * math.sin(hue)

    fy = (l + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    xyz = (
        _WHITE[0] * _lab_f_inverse(fx),
        _WHITE[1] * _lab_f_inverse(fy),
        _WHITE[2] * _lab_f_inverse(fz),
    )

    r, g, bl = (
        _encode(sum(m * v for m, v in zip(row, xyz))) for row in _XYZ_TO_LINEAR_RGB
    )
    return (r, g, bl)


def _require(value: Any, key: str) -> Any:
    if not isinstance(value, dict) or key not in value:
        raise ConfigError(f"[{key}] is required")
    return value[key]


@dataclass(frozen=True)
class MiscFlags:
    """Optional switches that alter a generated palette."""

    extremes: bool = False

    @classmethod
    def from_value(cls, value: Any) -> "MiscFlags":
        raw = _require(value, "misc-flags")
        if not isinstance(raw, list) or not all(isinstance(f, str) for f in raw):
            raise ConfigError("[misc-flags] must be a list of strings")
        return cls(extremes="extremes" in raw)


@dataclass(frozen=True)
class PaletteConfig:
    """The strategies that together describe a palette."""

    lum_strategy: LumStrategy
    chroma_strategy: ChromaStrategy
    hue_strategies: HueStrategies
    misc_flags: MiscFlags

    @classmethod
    def from_value(cls, value: Any) -> "PaletteConfig":
        return cls(
            lum_strategy=LumStrategy.from_value(_require(value, "lum-strategy")),
            chroma_strategy=ChromaStrategy.from_value(_require(value, "chroma-strategy")),
            hue_strategies=HueStrategies.from_value(_require(value, "hue-strategies")),
            misc_flags=MiscFlags.from_value(value),
        )


@dataclass(frozen=True)
class Palette:
    """A palette recipe that produces fresh sRGB colours on each call."""

    config: PaletteConfig

    @classmethod
    def from_value(cls, value: Any) -> "Palette":
        palette = _require(value, "palette")
        return cls(PaletteConfig.from_value(_require(palette, "config")))

    def generate(self, rng=None) -> list[tuple[float, float, float]]:
        rng = rng if rng is not None else random
        hues = self.config.hue_strategies.generate_hues(rng)
        colours = self.config.lum_strategy.attach_lums(hues, rng)
        colours = self.config.chroma_strategy.attach_chroma(colours, rng)

        if self.config.misc_flags.extremes:
            colours.append((0.0, 0.0, 0.0))
            colours.append((100.0, 0.0, 0.0))

        return [lch_to_srgb(l, c, h) for l, c, h in colours]