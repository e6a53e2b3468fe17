"""Cursor telemetry samples, file readers and the normalizer."""
from __future__ import annotations

import csv
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from .utils import clamp


@dataclass(frozen=True)
class CursorTelemetryPoint:
    time_ms: float
    cx: float
    cy: float

    def is_finite(self) -> bool:
        return math.isfinite(self.time_ms) and math.isfinite(self.cx) and math.isfinite(self.cy)


@dataclass(frozen=True)
class ZoomFocus:
    cx: float
    cy: float


class TelemetryFormatError(ValueError):
    pass


_TIME_KEYS = ("time_ms", "timeMs")


def _normalize_sample(sample: CursorTelemetryPoint, total_ms: float) -> CursorTelemetryPoint:
    return CursorTelemetryPoint(
        time_ms=clamp(sample.time_ms, 0.0, total_ms),
        cx=clamp(sample.cx, 0.0, 1.0),
        cy=clamp(sample.cy, 0.0, 1.0),
    )


def normalize_cursor_telemetry(
    telemetry: Iterable[CursorTelemetryPoint], total_ms: float
) -> List[CursorTelemetryPoint]:
    """Drop non-finite samples, sort by time and clamp into the frame.

    ``time_ms`` is clamped to ``[0, total_ms]`` and ``cx``/``cy`` to
    ``[0, 1]``. The input is left untouched; a new list is always returned.
    """
    samples = list(telemetry)
    finite = [s for s in samples if s.is_finite()]
    if len(finite) != len(samples):
        logger.debug("Dropped {} non-finite telemetry samples", len(samples) - len(finite))
    ordered = sorted(finite, key=lambda s: s.time_ms)
    return [_normalize_sample(s, total_ms) for s in ordered]


def max_sample_time(telemetry: Iterable[CursorTelemetryPoint]) -> float:
    """Largest timestamp among fully finite samples, never below 0.0."""
    times = [s.time_ms for s in telemetry if s.is_finite()]
    return max(0.0, max(times, default=0.0))


def _parse_number(value: Any) -> float:
    if value is None:
        return math.nan
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _time_value(row: Mapping[str, Any]) -> Any:
    for key in _TIME_KEYS:
        if key in row:
            return row[key]
    return None


def _point_from_mapping(row: Mapping[str, Any]) -> CursorTelemetryPoint:
    return CursorTelemetryPoint(
        time_ms=_parse_number(_time_value(row)),
        cx=_parse_number(row.get("cx")),
        cy=_parse_number(row.get("cy")),
    )


def _read_csv(path: Path) -> List[CursorTelemetryPoint]:
    with path.open(newline="") as f:
        reader = csv.DictReader(f)
        fields = set(reader.fieldnames or [])
        if not fields.intersection(_TIME_KEYS) or not {"cx", "cy"} <= fields:
            raise TelemetryFormatError(f"{path} must have time_ms, cx and cy columns")
        return [_point_from_mapping(row) for row in reader if row]


def _read_json(path: Path) -> List[CursorTelemetryPoint]:
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("samples")
    if not isinstance(data, list):
        raise TelemetryFormatError(f"{path} must hold a list of samples or an object with 'samples'")
    points: List[CursorTelemetryPoint] = []
    for item in data:
        if not isinstance(item, dict):
            raise TelemetryFormatError(f"{path}: sample entries must be objects, got {type(item).__name__}")
        points.append(_point_from_mapping(item))
    return points


def read_telemetry(path: Path | str) -> List[CursorTelemetryPoint]:
    """Load raw telemetry from a ``.csv`` or ``.json`` capture.

    Cells that do not parse as numbers come back as NaN so that
    :func:`normalize_cursor_telemetry` drops those samples.
    """
    tel_path = Path(path)
    if not tel_path.exists():
        raise FileNotFoundError(tel_path)
    suffix = tel_path.suffix.lower()
    if suffix == ".csv":
        points = _read_csv(tel_path)
    elif suffix == ".json":
        points = _read_json(tel_path)
    else:
        raise TelemetryFormatError(f"Unsupported telemetry format '{suffix}' for {tel_path}")
    logger.debug("Read {} telemetry samples from {}", len(points), tel_path)
    return points


def write_telemetry(path: Path, samples: Sequence[CursorTelemetryPoint]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time_ms", "cx", "cy"])
        for s in samples:
            writer.writerow([f"{s.time_ms:.3f}", f"{s.cx:.6f}", f"{s.cy:.6f}"])


def resolve_total_ms(
    telemetry: Sequence[CursorTelemetryPoint],
    explicit: Optional[float] = None,
    configured: Optional[float] = None,
) -> float:
    """Pick the timeline length: explicit value, then config, then the data.

    The result is never negative so clamped times stay inside ``[0, total_ms]``.
    """
    if explicit is not None:
        return max(0.0, float(explicit))
    if configured is not None:
        return max(0.0, float(configured))
    return max_sample_time(telemetry)
