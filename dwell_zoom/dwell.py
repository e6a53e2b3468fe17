"""Dwell segmentation: turn normalized cursor telemetry into zoom suggestions.

Samples are split into runs wherever the pointer jumps more than
``DWELL_MOVE_THRESHOLD`` between two consecutive samples. A run becomes a
candidate when it spans between ``MIN_DWELL_DURATION_MS`` and
``MAX_DWELL_DURATION_MS``. Only the adjacent-pair distance is checked, so a
slow drift made of small steps stays a single run.

Callers must pass samples from :func:`normalize_cursor_telemetry`; the
thresholds assume clamped ``[0, 1]`` coordinates and sorted timestamps.
"""
from __future__ import annotations

import csv
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import numpy as np
from loguru import logger

from .telemetry import CursorTelemetryPoint, ZoomFocus

MIN_DWELL_DURATION_MS = 450
MAX_DWELL_DURATION_MS = 2600
DWELL_MOVE_THRESHOLD = 0.02


@dataclass(frozen=True)
class ZoomDwellCandidate:
    center_time_ms: int
    focus: ZoomFocus
    strength: float

    def to_dict(self) -> dict:
        return {
            "centerTimeMs": self.center_time_ms,
            "focus": {"cx": self.focus.cx, "cy": self.focus.cy},
            "strength": self.strength,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _run_bounds(cx: np.ndarray, cy: np.ndarray, move_threshold: float) -> List[tuple[int, int]]:
    steps = np.hypot(np.diff(cx), np.diff(cy))
    breaks = (np.flatnonzero(steps > move_threshold) + 1).tolist()
    starts = [0] + breaks
    ends = breaks + [int(cx.size)]
    return list(zip(starts, ends))


def detect_zoom_dwell_candidates(
    samples: Sequence[CursorTelemetryPoint],
    *,
    min_duration_ms: float = MIN_DWELL_DURATION_MS,
    max_duration_ms: float = MAX_DWELL_DURATION_MS,
    move_threshold: float = DWELL_MOVE_THRESHOLD,
) -> List[ZoomDwellCandidate]:
    """Return dwell candidates in ascending time order.

    Each candidate is centred on the midpoint of its run, focused on the mean
    position of every sample in the run and weighted by the run duration.
    Runs with fewer than two samples or outside the duration bounds are
    skipped. Nothing is merged across runs.
    """
    if len(samples) < 2:
        return []

    times = np.fromiter((s.time_ms for s in samples), dtype=np.float64, count=len(samples))
    cx = np.fromiter((s.cx for s in samples), dtype=np.float64, count=len(samples))
    cy = np.fromiter((s.cy for s in samples), dtype=np.float64, count=len(samples))

    candidates: List[ZoomDwellCandidate] = []
    bounds = _run_bounds(cx, cy, move_threshold)
    for start, end in bounds:
        if end - start < 2:
            continue
        first_time = float(times[start])
        last_time = float(times[end - 1])
        duration = last_time - first_time
        if duration < min_duration_ms or duration > max_duration_ms:
            continue
        candidates.append(
            ZoomDwellCandidate(
                center_time_ms=_round_half_up((first_time + last_time) / 2.0),
                focus=ZoomFocus(cx=float(cx[start:end].mean()), cy=float(cy[start:end].mean())),
                strength=duration,
            )
        )

    logger.debug("Evaluated {} runs over {} samples, kept {} dwells", len(bounds), len(samples), len(candidates))
    return candidates


def write_candidates(path: Path, candidates: Sequence[ZoomDwellCandidate]) -> None:
    """Write candidates as CSV, or as a JSON list when *path* ends in ``.json``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps([c.to_dict() for c in candidates], indent=2))
        return
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["center_time_ms", "cx", "cy", "strength"])
        for c in candidates:
            writer.writerow([c.center_time_ms, f"{c.focus.cx:.4f}", f"{c.focus.cy:.4f}", f"{c.strength:.1f}"])


def read_candidates(csv_path: Path) -> List[ZoomDwellCandidate]:
    rows: List[ZoomDwellCandidate] = []
    with csv_path.open(newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            rows.append(
                ZoomDwellCandidate(
                    center_time_ms=int(float(row.get("center_time_ms", 0))),
                    focus=ZoomFocus(cx=float(row.get("cx", 0.0)), cy=float(row.get("cy", 0.0))),
                    strength=float(row.get("strength", 0.0)),
                )
            )
    return rows
