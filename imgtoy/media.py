"""Detection and decoding of source media: still images, GIFs and videos."""

from __future__ import annotations

import io
from enum import Enum
from typing import Any, Mapping, Union

import requests
from PIL import Image, ImageSequence

from imgtoy.value import ConfigError

_REQUEST_TIMEOUT = 30

Decoded = Union[Image.Image, list]


class ImageKind(Enum):
    IMAGE = "image"
    GIF = "gif"
    ANIM = "anim"

    @classmethod
    def from_path(cls, path: str) -> "ImageKind":
        return cls.from_extension(path.split(".")[-1])

    @classmethod
    def from_extension(cls, ext: str) -> "ImageKind":
        if ext == "gif":
            return cls.GIF
        if ext in ("png", "jpeg", "jpg", "tiff", "bmp"):
            return cls.IMAGE
        if ext in ("mp4", "mov", "avi"):
            return cls.ANIM
        raise ConfigError(f"no support for extension [{ext}]")

    @classmethod
    def from_mime(cls, mime: str) -> "ImageKind":
        essence = mime.split(";", 1)[0].strip().lower()
        main, sep, sub = essence.partition("/")
        if not sep or not main or not sub:
            raise ConfigError(f"invalid mime-type {mime}")
        if main == "image" and sub == "gif":
            return cls.GIF
        if main == "video":
            return cls.ANIM
        if main == "image":
            return cls.IMAGE
        raise ConfigError(f"no support for mime-type {mime}")

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any]) -> "ImageKind":
        for name, value in headers.items():
            if name.lower() == "content-type":
                return cls.from_mime(value)
        raise ConfigError("no content type is present")


def parse_localkind(path: str) -> ImageKind:
    return ImageKind.from_path(path)


def parse_webkind(url: str) -> ImageKind:
    response = requests.get(url, timeout=_REQUEST_TIMEOUT)
    return ImageKind.from_headers(response.headers)


def _decode_image(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def _decode_gif(data: bytes) -> list:
    image = Image.open(io.BytesIO(data))
    if image.format != "GIF":
        raise ValueError("data is not a GIF")
    return [frame.convert("RGBA") for frame in ImageSequence.Iterator(image)]


def parse_bytes(data: bytes, kind: ImageKind) -> Decoded:
    """Decode bytes as a single image, or as a list of RGBA frames for a GIF."""
    if kind is ImageKind.GIF:
        return _decode_gif(data)
    if kind is ImageKind.IMAGE:
        return _decode_image(data)
    raise ConfigError("animations cannot be decoded directly")


def parse_localfile(path: str) -> Decoded:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        print(f"ERROR READING: {path}")
        raise
    return parse_bytes(data, ImageKind.from_path(path))


def parse_webfile(url: str) -> Decoded:
    response = requests.get(url, timeout=_REQUEST_TIMEOUT)
    return parse_bytes(response.content, ImageKind.from_headers(response.headers))