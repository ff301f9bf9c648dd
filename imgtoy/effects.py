"""Image effects described by the configuration, resolved into concrete filters."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from imgtoy.ordered_effect import Ordered, OrderedDither
from imgtoy.palette import Palette
from imgtoy.value import ConfigError, ValueProperty, parse_property_as_f64, property_f64


@dataclass(frozen=True)
class Filter:
    """A concrete filter: its name and resolved parameter."""

    kind: str
    value: Any


def _parse_factor(key: str, value: Any) -> ValueProperty:
    if not isinstance(value, dict) or key not in value:
        raise ConfigError(f"[{key}] is required")
    factor = parse_property_as_f64(value[key], "factor")
    if factor is None:
        raise ConfigError(f"[{key}.factor] is required")
    return factor


def _factor_filter(key: str, factor: ValueProperty, rng) -> Filter:
    return Filter(key, float(factor.generate(rng if rng is not None else random)))


@dataclass(frozen=True)
class Brighten:
    """Brightens the image by a factor."""

    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> "Brighten":
        return cls(_parse_factor("brighten", value))

    def generate(self, rng=None) -> Filter:
        return _factor_filter("brighten", self.factor, rng)


@dataclass(frozen=True)
class Saturate:
    """Changes saturation by a factor."""

    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> "Saturate":
        return cls(_parse_factor("saturate", value))

    def generate(self, rng=None) -> Filter:
        return _factor_filter("saturate", self.factor, rng)


@dataclass(frozen=True)
class Contrast:
    """Changes contrast by a factor."""

    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> "Contrast":
        return cls(_parse_factor("contrast", value))

    def generate(self, rng=None) -> Filter:
        return _factor_filter("contrast", self.factor, rng)


@dataclass(frozen=True)
class HueRotate:
    """Rotates hues by a number of degrees."""

    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> "HueRotate":
        return cls(_parse_factor("hue-rotate", value))

    def generate(self, rng=None) -> Filter:
        return _factor_filter("hue-rotate", self.factor, rng)


@dataclass(frozen=True)
class MultiplyHue:
    """Multiplies hues by a factor."""

    factor: ValueProperty

    @classmethod
    def from_value(cls, value: Any) -> "MultiplyHue":
        return cls(_parse_factor("multiply-hue", value))

    def generate(self, rng=None) -> Filter:
        return _factor_filter("multiply-hue", self.factor, rng)


@dataclass(frozen=True)
class QuantizeHue:
    """Snaps hues to the nearest of a list of hues."""

    hues: tuple[ValueProperty, ...]

    @classmethod
    def from_value(cls, value: Any) -> "QuantizeHue":
        raw = value.get("hues") if isinstance(value, dict) else None
        if not isinstance(raw, list):
            raise ConfigError("[hues] must be a list")
        return cls(tuple(property_f64(hue) for hue in raw))

    def generate(self, rng=None) -> Filter:
        rng = rng if rng is not None else random
        return Filter("quantize-hue", tuple(float(h.generate(rng)) for h in self.hues))


class ErrorPropagatorKind(Enum):
    FLOYD_STEINBERG = "floyd-steinberg"
    JARVIS_JUDICE_NINKE = "jarvis-judice-ninke"
    ATKINSON = "atkinson"
    BURKES = "burkes"
    STUCKI = "stucki"
    SIERRA = "sierra"
    SIERRA_TWO_ROW = "sierra-two-row"
    SIERRA_LITE = "sierra-lite"


_PROPAGATOR_NAMES = {
    "floydsteinberg": ErrorPropagatorKind.FLOYD_STEINBERG,
    "floyd-steinberg": ErrorPropagatorKind.FLOYD_STEINBERG,
    "floyd_steinberg": ErrorPropagatorKind.FLOYD_STEINBERG,
    "jarvisjudiceninke": ErrorPropagatorKind.JARVIS_JUDICE_NINKE,
    "jarvis-judice-ninke": ErrorPropagatorKind.JARVIS_JUDICE_NINKE,
    "jarvis_judice_ninke": ErrorPropagatorKind.JARVIS_JUDICE_NINKE,
    "atkinson": ErrorPropagatorKind.ATKINSON,
    "burkes": ErrorPropagatorKind.BURKES,
    "stucki": ErrorPropagatorKind.STUCKI,
    "sierra": ErrorPropagatorKind.SIERRA,
    "sierra-two-row": ErrorPropagatorKind.SIERRA_TWO_ROW,
    "sierra_two_row": ErrorPropagatorKind.SIERRA_TWO_ROW,
    "sierra-lite": ErrorPropagatorKind.SIERRA_LITE,
    "sierra_to_row": ErrorPropagatorKind.SIERRA_LITE,
}


@dataclass(frozen=True)
class ErrorPropagatorDither:
    """A resolved error-diffusion dither with its palette."""

    kind: ErrorPropagatorKind
    palette: tuple[tuple[float, float, float], ...]


@dataclass(frozen=True)
class ErrorPropagator:
    """Error-diffusion dithering; a fresh palette is generated per use."""

    kind: ErrorPropagatorKind
    palette: Palette

    @classmethod
    def from_value(cls, value: Any) -> "ErrorPropagator":
        raw = value.get("type") if isinstance(value, dict) else None
        if not isinstance(raw, str):
            raise ConfigError("[type] must be a string")
        try:
            kind = _PROPAGATOR_NAMES[raw]
        except KeyError:
            raise ConfigError(f"error propagator {raw} is not supported") from None
        return cls(kind, Palette.from_value(value))

    def generate(self, rng=None) -> ErrorPropagatorDither:
        rng = rng if rng is not None else random
        return ErrorPropagatorDither(self.kind, tuple(self.palette.generate(rng)))


def _parse_hex_colour(raw: Any) -> tuple[float, float, float]:
    if not isinstance(raw, str) or len(raw) != 6:
        raise ConfigError("Hexcodes must be 6 characters long.")
    try:
        components = [int(raw[i : i + 2], 16) for i in (0, 2, 4)]
    except ValueError:
        raise ConfigError(f"{raw} is not a valid hexcode.") from None
    r, g, b = (c / 255.0 for c in components)
    return (r, g, b)


@dataclass(frozen=True)
class GradientMap:
    """Maps luminance thresholds onto colours."""

    entries: tuple[tuple[tuple[float, float, float], float], ...]

    @classmethod
    def from_value(cls, value: Any) -> "GradientMap":
        raw = value.get("gradient-map") if isinstance(value, dict) else None
        if not isinstance(raw, list):
            raise ConfigError("[gradient-map] must be a list of mappings")
        entries = []
        for entry in raw:
            if not isinstance(entry, dict):
                raise ConfigError("entries in [gradient-map] must be mappings.")
            threshold = entry.get("threshold")
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                raise ConfigError("[gradient-map.?.threshold] must be a float")
            entries.append((_parse_hex_colour(entry.get("colour")), float(threshold)))
        return cls(tuple(entries))

    def generate(self, rng=None) -> Filter:
        return Filter("gradient-map", self.entries)


Effect = Union[
    Brighten,
    Saturate,
    Contrast,
    HueRotate,
    MultiplyHue,
    QuantizeHue,
    GradientMap,
    ErrorPropagator,
    Ordered,
]

_EFFECTS = {
    "brighten": Brighten,
    "saturate": Saturate,
    "contrast": Contrast,
    "hue-rotate": HueRotate,
    "multiply-hue": MultiplyHue,
    "quantize-hue": QuantizeHue,
    "gradient-map": GradientMap,
    "error-propagator": ErrorPropagator,
    "ordered": Ordered,
}


def parse_effect(value: Any) -> Effect:
    """Parse an effect entry, named by the first key of its mapping."""
    if not isinstance(value, dict) or not value:
        raise ConfigError("an effect must be a non-empty mapping")
    name = next(iter(value))
    try:
        effect_type = _EFFECTS[name]
    except (KeyError, TypeError):
        raise ConfigError(f"effect {name} is not supported.") from None
    return effect_type.from_value(value)


@dataclass(frozen=True)
class Effects:
    """The ordered list of effects applied on each iteration."""

    kinds: tuple[Effect, ...]

    @classmethod
    def from_value(cls, value: Any) -> "Effects":
        raw = value.get("effects") if isinstance(value, dict) else None
        if not isinstance(raw, list):
            raise ConfigError("[effects] must be a list")
        return cls(tuple(parse_effect(entry) for entry in raw))

    def generate(self, rng=None) -> list[Union[Filter, ErrorPropagatorDither, OrderedDither]]:
        """Resolve every effect into its concrete form, in order."""
        rng = rng if rng is not None else random
        return [
            kind.generate_effect(rng) if isinstance(kind, Ordered) else kind.generate(rng)
            for kind in self.kinds
        ]