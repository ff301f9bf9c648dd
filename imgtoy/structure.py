"""The top-level configuration: source media, size constraints, output and effects."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from PIL import Image

from imgtoy.effects import Effects
from imgtoy.media import (
    Decoded,
    ImageKind,
    parse_localfile,
    parse_localkind,
    parse_webfile,
    parse_webkind,
)
from imgtoy.value import ConfigError

_WIDTH_PARAM = re.compile(r"&width=[0-9]+")
_HEIGHT_PARAM = re.compile(r"&height=[0-9]+")


def _section(value: Any, key: str) -> Any:
    if not isinstance(value, dict) or key not in value:
        raise ConfigError(f"[{key}] is required")
    return value[key]


def _as_u64(raw: Any, context: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ConfigError(f"[{context}] must be a non-negative integer")
    return raw


@dataclass(frozen=True)
class SourceKind:
    """Where the source media comes from: a local file or a URL."""

    path: str
    is_url: bool = False

    @classmethod
    def from_value(cls, value: Any) -> "SourceKind":
        if not isinstance(value, dict):
            raise ConfigError("[source] must be a mapping")
        has_file = "file" in value
        has_url = "url" in value
        if has_file and has_url:
            raise ConfigError("only one of file/url accepted")
        if not has_file and not has_url:
            raise ConfigError("at least one of file/url required")

        key = "file" if has_file else "url"
        raw = value[key]
        if not isinstance(raw, str):
            raise ConfigError(f"[source.{key}] must be a string")
        if has_file:
            return cls(raw)
        stripped = _HEIGHT_PARAM.sub("", _WIDTH_PARAM.sub("", raw))
        return cls(stripped, is_url=True)

    def get_image_kind(self) -> ImageKind:
        """Detect the media kind from the file extension or the response headers."""
        if self.is_url:
            return parse_webkind(self.path)
        return parse_localkind(self.path)


def _round_half_away(number: float) -> int:
    return math.floor(number + 0.5)


def resize_image(image: Image.Image, factor: float) -> Image.Image:
    """Scale an image by ``factor`` with nearest-neighbour sampling, keeping its aspect."""
    width, height = image.size
    target_w = int(width * factor)
    target_h = int(height * factor)
    ratio = min(target_w / width, target_h / height)
    new_size = (
        max(_round_half_away(width * ratio), 1),
        max(_round_half_away(height * ratio), 1),
    )
    return image.resize(new_size, Image.Resampling.NEAREST)


@dataclass(frozen=True)
class SizeConstraint:
    """A limit on the size of the source: its largest side or its pixel count."""

    kind: str
    limit: int

    @classmethod
    def from_value(cls, value: Any) -> Optional["SizeConstraint"]:
        if not isinstance(value, dict):
            return None
        for key in ("max-dim", "max-pixels"):
            if key in value:
                return cls(key, _as_u64(value[key], key))
        return None

    def as_string(self) -> str:
        return f"{self.kind}: {self.limit}"

    def constrain(self, image: Image.Image) -> Image.Image:
        """Shrink the image to fit the constraint; smaller images are returned as-is."""
        x, y = image.size
        if self.kind == "max-dim":
            largest = max(x, y)
            if self.limit < largest:
                return resize_image(image, self.limit / largest)
            return image
        pixels = x * y
        if pixels > self.limit:
            return resize_image(image, math.sqrt(self.limit / pixels))
        return image


@dataclass(frozen=True)
class Source:
    """The source media together with an optional size constraint."""

    kind: SourceKind
    constraint: Optional[SizeConstraint] = None

    @classmethod
    def from_value(cls, value: Any) -> "Source":
        source = _section(value, "source")
        return cls(SourceKind.from_value(source), SizeConstraint.from_value(source))

    def constraint_str(self) -> str:
        return self.constraint.as_string() if self.constraint is not None else "None"

    def perform(self) -> Decoded:
        """Load the source; still images are constrained, frame lists are not."""
        if self.kind.is_url:
            result = parse_webfile(self.kind.path)
        else:
            result = parse_localfile(self.kind.path)
        if self.constraint is not None and isinstance(result, Image.Image):
            return self.constraint.constrain(result)
        return result


@dataclass(frozen=True)
class Output:
    """Where results are written and how many iterations to run."""

    path: str
    n: int

    @classmethod
    def from_value(cls, value: Any) -> "Output":
        output = _section(value, "output")
        path = _section(output, "path")
        if not isinstance(path, str):
            raise ConfigError("[output.path] must be a string")
        return cls(path, _as_u64(_section(output, "n"), "output.n"))


@dataclass(frozen=True)
class MainConfiguration:
    """The whole configuration file."""

    source: Source
    output: Output
    effects: Effects

    @classmethod
    def from_value(cls, value: Any) -> "MainConfiguration":
        return cls(
            source=Source.from_value(value),
            output=Output.from_value(value),
            effects=Effects.from_value(value),
        )