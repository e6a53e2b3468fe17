"""Read the timeline length of a recording with ffprobe."""
from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger


class FFprobeError(RuntimeError):
    pass


def _probe_durations(path: Path, ffprobe: str) -> Dict[str, Any]:
    cmd = [
        ffprobe,
        "-v",
        "error",
        "-show_entries",
        "stream=codec_type,duration:format=duration",
        "-of",
        "json",
        str(path),
    ]
    logger.debug("Probing {} with {}", path, ffprobe)
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        raise FFprobeError(f"ffprobe failed on {path} (code {result.returncode}): {result.stderr.strip()}")
    if not result.stdout.strip():
        raise FFprobeError(f"ffprobe produced no output for {path}")
    return json.loads(result.stdout)


def _as_seconds(value: Any) -> Optional[float]:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


def video_duration_ms(path: Path, ffprobe: str = "ffprobe") -> float:
    """Duration of the first video stream in milliseconds.

    Streams without their own duration (common for mkv/webm) fall back to the
    container duration.
    """
    data = _probe_durations(path, ffprobe)
    videos = [s for s in data.get("streams", []) if s.get("codec_type") == "video"]
    if not videos:
        raise FFprobeError(f"No video streams found in {path}")
    seconds = _as_seconds(videos[0].get("duration"))
    if seconds is None:
        seconds = _as_seconds(data.get("format", {}).get("duration"))
    if seconds is None:
        raise FFprobeError(f"No duration reported for {path}")
    logger.debug("{} lasts {:.3f}s", path, seconds)
    return seconds * 1000.0
