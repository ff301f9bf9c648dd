"""Randomisable configuration values: fixed numbers, choices and ranges."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Union

Number = Union[int, float]
PropertyKind = Literal["fixed", "choice", "range"]
NumberType = Literal["usize", "isize", "f64"]


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


def _resolve_rng(rng):
    return rng if rng is not None else random


@dataclass(frozen=True)
class ValueProperty:
    """A number that is either fixed, picked from a list, or drawn from a range."""

    kind: PropertyKind
    values: tuple
    number_type: NumberType = "f64"

    def generate(self, rng=None) -> Number:
        """Produce one concrete value."""
        rng = _resolve_rng(rng)
        if self.kind == "fixed":
            return self.values[0]
        if self.kind == "choice":
            if not self.values:
                raise ConfigError("cannot choose from an empty list of values")
            return rng.choice(self.values)
        low, high = self.values
        if self.number_type == "isize":
            raise ConfigError("ranges over signed integers are not supported")
        if not low < high:
            raise ConfigError(f"range {low}..{high} is empty")
        if self.number_type == "usize":
            return rng.randrange(low, high)
        return low + rng.random() * (high - low)


@dataclass(frozen=True)
class Chance:
    """A probability check backed by a value property.

    A roll succeeds when the generated value is below a uniform draw in [0, 1].
    """

    value: ValueProperty

    def roll(self, rng=None) -> bool:
        rng = _resolve_rng(rng)
        threshold = rng.uniform(0.0, 1.0)
        return self.value.generate(rng) < threshold


def _as_u64(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def _as_i64(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _as_f64(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def _property(
    value: Any, convert: Callable[[Any], Optional[Number]], number_type: NumberType
) -> ValueProperty:
    exact = convert(value)
    if exact is not None:
        return ValueProperty("fixed", (exact,), number_type)
    if isinstance(value, dict):
        bounds = []
        for key in ("min", "max"):
            if key not in value:
                raise ConfigError(f"expected [{key}] in a range mapping")
            bound = convert(value[key])
            if bound is None:
                raise ConfigError(f"[{key}] must be a valid {number_type}, got {value[key]!r}")
            bounds.append(bound)
        return ValueProperty("range", tuple(bounds), number_type)
    if isinstance(value, list):
        options = [convert(option) for option in value]
        if any(option is None for option in options):
            raise ConfigError(f"every option must be a valid {number_type}: {value!r}")
        return ValueProperty("choice", tuple(options), number_type)
    raise ConfigError(f"unsupported value {value!r} for a {number_type} property")


def property_usize(value: Any) -> ValueProperty:
    """Parse a non-negative integer property."""
    return _property(value, _as_u64, "usize")


def property_isize(value: Any) -> ValueProperty:
    """Parse a signed integer property."""
    return _property(value, _as_i64, "isize")


def property_f64(value: Any) -> ValueProperty:
    """Parse a floating-point property."""
    return _property(value, _as_f64, "f64")


def _lookup(value: Any, name: str, parse: Callable[[Any], ValueProperty]):
    if isinstance(value, dict) and name in value:
        return parse(value[name])
    return None


def parse_property_as_usize(value: Any, name: str) -> Optional[ValueProperty]:
    """Parse ``value[name]`` as a usize property, or None when absent."""
    return _lookup(value, name, property_usize)


def parse_property_as_isize(value: Any, name: str) -> Optional[ValueProperty]:
    """Parse ``value[name]`` as an isize property, or None when absent."""
    return _lookup(value, name, property_isize)


def parse_property_as_f64(value: Any, name: str) -> Optional[ValueProperty]:
    """Parse ``value[name]`` as an f64 property, or None when absent."""
    return _lookup(value, name, property_f64)