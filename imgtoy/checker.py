"""Checkerboard modifier for ordered dithering."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Optional, Union

from imgtoy.value import (
    Chance,
    ConfigError,
    ValueProperty,
    parse_property_as_f64,
    parse_property_as_usize,
    property_f64,
)

SourceTool = Union[str, tuple[int, int]]
FactorTool = Union[str, tuple[str, float]]


def _type_of(value: Any, context: str) -> str:
    kind = value.get("type") if isinstance(value, dict) else None
    if not isinstance(kind, str):
        raise ConfigError(f"[{context}.type] must be a string")
    return kind


def _section(value: Any, key: str) -> Any:
    if not isinstance(value, dict) or key not in value:
        raise ConfigError(f"[{key}] is required")
    return value[key]


def _required_usize(value: Any, name: str) -> ValueProperty:
    prop = parse_property_as_usize(value, name)
    if prop is None:
        raise ConfigError(f"[{name}] is required")
    return prop


@dataclass(frozen=True)
class CheckerSource:
    """Where the checker pattern radiates from: the centre, or a fixed point."""

    fixed: Optional[tuple[ValueProperty, ValueProperty]] = None

    @classmethod
    def _from_value(cls, value: Any) -> "CheckerSource":
        source = _section(value, "source")
        kind = _type_of(source, "source")
        if kind == "center":
            return cls()
        if kind == "fixed":
            fixed = _section(source, "fixed")
            return cls((_required_usize(fixed, "x"), _required_usize(fixed, "y")))
        raise ConfigError(f"checker source {kind} is not supported")

    def _generate(self, rng) -> SourceTool:
        if self.fixed is None:
            return "center"
        x, y = self.fixed
        return (x.generate(rng), y.generate(rng))


@dataclass(frozen=True)
class CheckerFactor:
    """How the checker pattern scales: linearly, or by an exponent."""

    exponent: Optional[ValueProperty] = None

    @classmethod
    def _from_value(cls, value: Any) -> "CheckerFactor":
        factor = _section(value, "factor")
        kind = _type_of(factor, "factor")
        if kind == "linear":
            return cls()
        if kind == "exponential":
            # The exponent is read from the factor mapping itself, so it takes
            # the shape of a range with [min] and [max].
            return cls(property_f64(factor))
        raise ConfigError(f"kind {kind} not currently supported.")

    def _generate(self, rng) -> FactorTool:
        if self.exponent is None:
            return "linear"
        return ("exponential", self.exponent.generate(rng))


@dataclass(frozen=True)
class CheckerIter:
    """A checker pattern applied a number of times."""

    iterations: ValueProperty


@dataclass(frozen=True)
class CheckerFrom:
    """A checker pattern spreading from a source point."""

    source: CheckerSource
    factor: CheckerFactor
    modulo: Optional[ValueProperty] = None


@dataclass(frozen=True)
class Checker:
    """Applies a checker pattern to the dither matrix on a successful roll."""

    chance: Chance
    kind: Union[CheckerIter, CheckerFrom]

    @classmethod
    def from_value(cls, value: Any) -> Optional["Checker"]:
        checker = value.get("checker") if isinstance(value, dict) else None
        if checker is None:
            return None

        chance = parse_property_as_f64(checker, "chance")
        if chance is None:
            chance = ValueProperty("fixed", (0.5,), "f64")

        kind = _type_of(checker, "checker")
        if kind == "iter":
            parsed: Union[CheckerIter, CheckerFrom] = CheckerIter(
                _required_usize(checker, "iter")
            )
        elif kind == "from":
            section = _section(checker, "from")
            parsed = CheckerFrom(
                CheckerSource._from_value(section),
                CheckerFactor._from_value(section),
                parse_property_as_usize(section, "modulo"),
            )
        else:
            raise ConfigError(f"kind {kind} is not supported for checker.")
        return cls(Chance(chance), parsed)

    def to_tool(self, rng=None) -> Optional[tuple]:
        """Return ``("iter", n)`` or ``("from", source, factor, modulo)``, or None.

        ``source`` is ``"center"`` or ``(x, y)``; ``factor`` is ``"linear"`` or
        ``("exponential", exponent)``; ``modulo`` is an int or None.
        """
        rng = rng if rng is not None else random
        if not self.chance.roll(rng):
            return None
        if isinstance(self.kind, CheckerIter):
            return ("iter", self.kind.iterations.generate(rng))
        modulo = self.kind.modulo.generate(rng) if self.kind.modulo is not None else None
        return (
            "from",
            self.kind.source._generate(rng),
            self.kind.factor._generate(rng),
            modulo,
        )