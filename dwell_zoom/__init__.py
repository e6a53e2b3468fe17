"""Cursor dwell analysis for zoom-effect suggestions."""

from .dwell import (
    DWELL_MOVE_THRESHOLD,
    MAX_DWELL_DURATION_MS,
    MIN_DWELL_DURATION_MS,
    ZoomDwellCandidate,
    detect_zoom_dwell_candidates,
)
from .telemetry import CursorTelemetryPoint, ZoomFocus, normalize_cursor_telemetry

__all__ = [
    "CursorTelemetryPoint",
    "DWELL_MOVE_THRESHOLD",
    "MAX_DWELL_DURATION_MS",
    "MIN_DWELL_DURATION_MS",
    "ZoomDwellCandidate",
    "ZoomFocus",
    "detect_zoom_dwell_candidates",
    "normalize_cursor_telemetry",
]
