"""Luminance strategies that expand hues into (lum, hue) pairs."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from imgtoy.value import (
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
    property_f64,
)


class LumStrategyKind(Enum):
    STACKED_EXACT = "stacked-exact"
    EXACT = "exact"
    RANDOM = "random"
    DISTRIBUTED = "distributed"
    DISTRIBUTED_AREA = "distributed/area"
    DISTRIBUTED_NUDGE = "distributed/nudge"
    LOOPING_PREFERENCE = "looping-preference"


def _uniform(rng, low: float, high: float) -> float:
    if not low < high:
        raise ConfigError(f"range {low}..{high} is empty")
    return low + rng.random() * (high - low)


def _fraction(i: int, n: int) -> float:
    # A single stack divides zero by zero, which yields NaN.
    return i / (n - 1) if n > 1 else math.nan


def _clamp(x: float, low: float, high: float) -> float:
    if math.isnan(x):
        return x
    return min(max(x, low), high)


def _required(value: Any, name: str, parse) -> ValueProperty:
    prop = parse(value, name)
    if prop is None:
        raise ConfigError(f"lum-strategy requires [{name}]")
    return prop


def _gen(prop: Optional[ValueProperty], name: str, rng):
    if prop is None:
        raise ConfigError(f"lum-strategy is missing [{name}]")
    return prop.generate(rng)


def _fixed(number, number_type) -> ValueProperty:
    return ValueProperty("fixed", (number,), number_type)


@dataclass(frozen=True)
class LumMethod:
    """The parameters of one luminance strategy."""

    kind: LumStrategyKind
    lums: tuple[ValueProperty, ...] = ()
    lum: Optional[ValueProperty] = None
    stacks: Optional[ValueProperty] = None
    overlap: Optional[ValueProperty] = None
    nudge_size: Optional[ValueProperty] = None
    focus_hue: Optional[ValueProperty] = None
    segments: Optional[ValueProperty] = None
    spread_amount: Optional[ValueProperty] = None
    spread_size: Optional[ValueProperty] = None
    clamp_min: Optional[ValueProperty] = None
    clamp_max: Optional[ValueProperty] = None

    @classmethod
    def from_value(cls, value: Any) -> "LumMethod":
        raw = value.get("type") if isinstance(value, dict) else None
        if not isinstance(raw, str):
            raise ConfigError("[lum-strategy.type] must be a string")
        try:
            kind = LumStrategyKind(raw)
        except ValueError:
            raise ConfigError(f"lum-strategy '{raw}' is not supported") from None

        if kind is LumStrategyKind.STACKED_EXACT:
            lums = value.get("lums")
            if not isinstance(lums, list):
                raise ConfigError("[lums] must be a list")
            return cls(kind, lums=tuple(property_f64(l) for l in lums))
        if kind is LumStrategyKind.EXACT:
            return cls(kind, lum=_required(value, "lum", parse_property_as_f64))
        if kind is LumStrategyKind.RANDOM:
            return cls(kind, stacks=parse_property_as_usize(value, "stacks"))
        if kind is LumStrategyKind.DISTRIBUTED:
            return cls(kind, stacks=_required(value, "count", parse_property_as_usize))
        if kind is LumStrategyKind.DISTRIBUTED_AREA:
            return cls(
                kind,
                overlap=_required(value, "overlap", parse_property_as_f64),
                stacks=_required(value, "count", parse_property_as_usize),
            )
        if kind is LumStrategyKind.DISTRIBUTED_NUDGE:
            return cls(
                kind,
                nudge_size=_required(value, "nudge-size", parse_property_as_f64),
                stacks=_required(value, "count", parse_property_as_usize),
            )
        return cls(
            kind,
            focus_hue=_required(value, "focus-hue", parse_property_as_f64),
            segments=_required(value, "segments", parse_property_as_usize),
            spread_amount=parse_property_as_usize(value, "spread-amnt") or _fixed(0, "usize"),
            spread_size=parse_property_as_f64(value, "spread-size") or _fixed(10.0, "f64"),
            clamp_min=parse_property_as_f64(value, "clamp-min") or _fixed(0.0, "f64"),
            clamp_max=parse_property_as_f64(value, "clamp-max") or _fixed(100.0, "f64"),
        )

    def generate(
        self, hues: Sequence[float], min_lum: float, max_lum: float, rng=None
    ) -> list[tuple[float, float]]:
        """Expand hues into ``(lum, hue)`` pairs."""
        rng = rng if rng is not None else random
        kind = self.kind
        span = max_lum - min_lum

        if kind is LumStrategyKind.EXACT:
            return [(_gen(self.lum, "lum", rng), hue) for hue in hues]

        if kind is LumStrategyKind.STACKED_EXACT:
            return [(lum.generate(rng), hue) for hue in hues for lum in self.lums]

        if kind is LumStrategyKind.RANDOM:
            stacks = self.stacks.generate(rng) if self.stacks is not None else 1
            return [(_uniform(rng, 0.0, 100.0), hue) for hue in hues for _ in range(stacks)]

        if kind is LumStrategyKind.DISTRIBUTED:
            stacks = _gen(self.stacks, "count", rng)
            return [
                (min_lum + _fraction(i, stacks) * span, hue)
                for hue in hues
                for i in range(stacks)
            ]

        if kind is LumStrategyKind.DISTRIBUTED_AREA:
            stacks = _gen(self.stacks, "count", rng)
            cols = []
            for hue in hues:
                for i in range(stacks):
                    step = span / stacks
                    start = min_lum + i * step
                    end = start + step
                    overlap = _gen(self.overlap, "overlap", rng)
                    start = max(start - overlap, min_lum)
                    end = min(end + overlap, max_lum)
                    cols.append((_uniform(rng, start, end), hue))
            return cols

        if kind is LumStrategyKind.DISTRIBUTED_NUDGE:
            stacks = _gen(self.stacks, "count", rng)
            nudge = _gen(self.nudge_size, "nudge-size", rng)
            cols = []
            for hue in hues:
                for i in range(stacks):
                    l = min_lum + _fraction(i, stacks) * span
                    l = _clamp(l + _uniform(rng, -nudge, nudge), 0.0, 100.0)
                    cols.append((l, hue))
            return cols

        return self._looping_preference(hues, rng)

    def _looping_preference(self, hues, rng) -> list[tuple[float, float]]:
        focus = math.fmod(_gen(self.focus_hue, "focus-hue", rng), 360.0)
        segments = _gen(self.segments, "segments", rng)
        spread_amount = _gen(self.spread_amount, "spread-amnt", rng)
        spread_size = _gen(self.spread_size, "spread-size", rng)
        clamp_min = _gen(self.clamp_min, "clamp-min", rng)
        clamp_max = _gen(self.clamp_max, "clamp-max", rng)

        segment_size = 360.0 / segments if segments else math.inf
        cols = []
        for hue in hues:
            diff = abs(focus - hue)
            location = math.fmod(diff / segment_size, 2.0)
            final = abs(location - 1.0)
            cols.append((final * 100.0, hue))

            for _ in range(spread_amount):
                low = max(final - spread_size, clamp_min)
                high = min(final + spread_size, clamp_max)
                low = min(low, final)
                high = max(high, final)
                low *= 100.0
                high *= 100.0
                if low < high:
                    cols.append((_uniform(rng, low, high), hue))
        return cols


@dataclass(frozen=True)
class LumStrategy:
    """A luminance method together with its luminance bounds."""

    method: LumMethod
    min_lum: Optional[ValueProperty] = None
    max_lum: Optional[ValueProperty] = None

    @classmethod
    def from_value(cls, value: Any) -> "LumStrategy":
        return cls(
            LumMethod.from_value(value),
            parse_property_as_f64(value, "min-lum"),
            parse_property_as_f64(value, "max-lum"),
        )

    def attach_lums(self, hues: Sequence[float], rng=None) -> list[tuple[float, float]]:
        rng = rng if rng is not None else random
        min_lum = self.min_lum.generate(rng) if self.min_lum is not None else 0.0
        max_lum = self.max_lum.generate(rng) if self.max_lum is not None else 100.0
        return self.method.generate(hues, min_lum, max_lum, rng)