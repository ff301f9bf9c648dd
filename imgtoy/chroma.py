"""Chroma assignment for palette colours."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from imgtoy.value import ConfigError


class ChromaStrategyKind(Enum):
    RANDOM = "random"


@dataclass(frozen=True)
class ChromaStrategy:
    """Decides the chroma of each generated colour."""

    kind: ChromaStrategyKind

    @classmethod
    def from_value(cls, value: Any) -> "ChromaStrategy":
        raw = value.get("type") if isinstance(value, dict) else None
        if not isinstance(raw, str):
            raise ConfigError("[chroma-strategy.type] must be a string")
        try:
            return cls(ChromaStrategyKind(raw))
        except ValueError:
            raise ConfigError(f"strategy {raw} is not supported.") from None

    def attach_chroma(
        self, colours: Iterable[tuple[float, float]], rng=None
    ) -> list[tuple[float, float, float]]:
        """Turn ``(lum, hue)`` pairs into ``(lum, chroma, hue)`` triples."""
        rng = rng if rng is not None else random
        return [(lum, rng.random() * 128.0, hue) for lum, hue in colours]