"""Splitting animated media into frames and joining frames back, via ffmpeg."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable

from PIL import Image

from imgtoy.media import parse_localfile
from imgtoy.value import ConfigError

FFMPEG = "ffmpeg"
FFPROBE = "ffprobe"


@dataclass(frozen=True)
class FfmpegPathUtil:
    """Paths for the frames and audio of one working directory."""

    prefix: str
    temp: bool = True

    def _base(self) -> str:
        return "temp" if self.temp else "."

    def dir(self) -> str:
        return f"{self._base()}/{self.prefix}"

    def frame_path(self) -> str:
        """The numbered frame pattern understood by ffmpeg."""
        return f"{self.dir()}/frame-%04d.png"

    def frame_path_rs(self, i: int) -> str:
        """The path of frame number ``i``."""
        return f"{self.dir()}/frame-{i:04}.png"

    def audio_path(self) -> str:
        """The audio track extracted from the source, shared by every prefix."""
        return f"{self._base()}/source/audio.mp3"


@dataclass(frozen=True)
class VideoInfo:
    fps: float
    frame_count: int


def _run(args: list) -> subprocess.CompletedProcess:
    return subprocess.run(args, check=True, capture_output=True, text=True)


def _parse_rate(raw: str) -> float:
    try:
        return float(Fraction(raw))
    except (ValueError, ZeroDivisionError):
        return 0.0


def get_video_info(path: str) -> VideoInfo:
    """Read the frame rate and frame count of the first video stream."""
    result = _run(
        [
            FFPROBE,
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "stream=avg_frame_rate,nb_frames",
            "-of",
            "json",
            path,
        ]
    )
    streams = json.loads(result.stdout or "{}").get("streams") or []
    if not streams:
        raise ConfigError(f"{path} has no video stream")
    stream = streams[0]
    frames = str(stream.get("nb_frames", ""))
    return VideoInfo(
        fps=_parse_rate(str(stream.get("avg_frame_rate", "0/1"))),
        frame_count=int(frames) if frames.isdigit() else 0,
    )


def split_media_into_frames(path: str, path_util: FfmpegPathUtil) -> None:
    """Write every frame of ``path`` as PNG, then extract its audio track."""
    os.makedirs(path_util.dir(), exist_ok=True)
    _run(
        [
            FFMPEG,
            "-y",
            "-hwaccel",
            "cuda",
            "-i",
            path,
            "-fps_mode",
            "passthrough",
            path_util.frame_path(),
        ]
    )
    _run([FFMPEG, "-y", "-hwaccel", "cuda", "-i", path, path_util.audio_path()])


def combine_frames_into_file(
    path_util: FfmpegPathUtil, out: str, frame_rate: float, audio: bool
) -> None:
    """Join the numbered frames, optionally with the extracted audio, into ``out``."""
    args = [FFMPEG, "-y", "-f", "image2", "-i", path_util.frame_path()]
    if audio:
        args += ["-i", path_util.audio_path()]
    args += ["-r", str(int(frame_rate)), "-c:a", "mp3", out]
    _run(args)


def split_media(path: str, path_util: FfmpegPathUtil) -> tuple[list, float]:
    """Split media into decoded frames; returns the frames and the frame rate."""
    info = get_video_info(path)
    split_media_into_frames(path, path_util)
    frames = []
    for i in range(1, info.frame_count + 1):
        frame = parse_localfile(path_util.frame_path_rs(i))
        if not isinstance(frame, Image.Image):
            raise ConfigError(f"frame {i} is not a still image")
        frames.append(frame)
    return frames, info.fps


def combine_media(
    frames: Iterable[Image.Image], frame_rate: float, path_util: FfmpegPathUtil, out: str
) -> None:
    """Save frames into the working directory and join them into ``out``."""
    os.makedirs(path_util.dir(), exist_ok=True)
    for i, frame in enumerate(frames, start=1):
        frame.save(path_util.frame_path_rs(i))
    combine_frames_into_file(path_util, out, frame_rate, True)


def clear_temp(temp_prefix: str) -> None:
    """Remove the temporary working directory of a prefix."""
    shutil.rmtree(os.path.join("temp", temp_prefix))